import json
import os
from unittest.mock import Mock, patch

import pytest
import requests

from preachpoint.constants import PREACHPOINT_SERVER_DEFAULT_BASE_URL
from preachpoint.helpers.client import (
    HealthResponse,
    get_commentary,
    get_passage,
    health_check,
    list_books,
    list_chapters,
)


def mock_json_response(payload: dict) -> Mock:
    mock_response = Mock()
    mock_response.json.return_value = payload
    return mock_response


class TestHealthCheck:
    """Unit tests for the health_check method."""

    @patch("preachpoint.helpers.client.requests.get")
    def test_health_check_success(self, mock_get):
        """Test successful health check with default base URL."""
        server_response = {"status": "healthy", "books_loaded": 66}
        mock_get.return_value = mock_json_response(server_response)

        result = health_check()

        mock_get.assert_called_once_with(
            f"{PREACHPOINT_SERVER_DEFAULT_BASE_URL}/health", timeout=30
        )
        mock_get.return_value.raise_for_status.assert_called_once()
        assert isinstance(result, HealthResponse)
        assert result.status == "healthy"
        assert result.books_loaded == 66

    @patch.dict(os.environ, {"PREACHPOINT_API_URL": "http://env-server:7000"})
    @patch("preachpoint.helpers.client.requests.get")
    def test_health_check_with_env_variable(self, mock_get):
        """Test health check uses PREACHPOINT_API_URL environment variable."""
        mock_get.return_value = mock_json_response({"status": "healthy", "books_loaded": 1})

        health_check()

        mock_get.assert_called_once_with("http://env-server:7000/health", timeout=30)

    @patch("preachpoint.helpers.client.requests.get")
    def test_health_check_strips_trailing_slash(self, mock_get):
        """Test that trailing slashes are stripped from base URL."""
        mock_get.return_value = mock_json_response({"status": "healthy", "books_loaded": 1})

        health_check(base_url="http://example.com:9000/")

        mock_get.assert_called_once_with("http://example.com:9000/health", timeout=30)

    @patch("preachpoint.helpers.client.requests.get")
    def test_health_check_http_error(self, mock_get):
        mock_response = Mock()
        mock_response.raise_for_status.side_effect = requests.HTTPError(
            "503 Server Error"
        )
        mock_get.return_value = mock_response

        with pytest.raises(requests.HTTPError):
            health_check()


class TestLookups:
    @patch("preachpoint.helpers.client.requests.get")
    def test_list_books(self, mock_get):
        mock_get.return_value = mock_json_response({"books": ["Genesis", "Exodus"]})

        assert list_books() == ["Genesis", "Exodus"]
        mock_get.assert_called_once_with(
            f"{PREACHPOINT_SERVER_DEFAULT_BASE_URL}/api/books", timeout=30
        )

    @patch("preachpoint.helpers.client.requests.get")
    def test_list_chapters(self, mock_get):
        mock_get.return_value = mock_json_response({"chapters": [1, 2, 3, 4]})

        assert list_chapters("Ruth", base_url="http://example.com") == [1, 2, 3, 4]
        mock_get.assert_called_once_with(
            "http://example.com/api/chapters", params={"book": "Ruth"}, timeout=30
        )


class TestGetPassage:
    """Unit tests for the get_passage method."""

    @patch("preachpoint.helpers.client.requests.post")
    def test_get_passage(self, mock_post):
        mock_post.return_value = mock_json_response({"text": "3:16 For God so loved"})

        result = get_passage("John", 3, 16)

        mock_post.assert_called_once_with(
            f"{PREACHPOINT_SERVER_DEFAULT_BASE_URL}/api/verses",
            headers={"Content-Type": "application/json"},
            data=json.dumps({"book": "John", "startChapter": 3, "startVerse": 16}),
            timeout=30,
        )
        assert result == "3:16 For God so loved"

    @patch("preachpoint.helpers.client.requests.post")
    def test_get_passage_translated(self, mock_post):
        mock_post.return_value = mock_json_response({"translation": "3:16 Want so lief"})

        result = get_passage("John", 3, 16, 3, 17, translate=True)

        url = mock_post.call_args.args[0]
        payload = json.loads(mock_post.call_args.kwargs["data"])
        assert url.endswith("/api/translate")
        assert payload["endChapter"] == 3
        assert payload["endVerse"] == 17
        assert result == "3:16 Want so lief"

    @patch("preachpoint.helpers.client.requests.post")
    def test_get_passage_unexpected_response(self, mock_post):
        mock_post.return_value = mock_json_response({"error": "oops"})

        with pytest.raises(ValueError, match="Unexpected response format"):
            get_passage("John", 3, 16)

    def test_empty_book(self):
        with pytest.raises(ValueError, match="book must be a non-empty string"):
            get_passage("  ", 3, 16)


class TestGetCommentary:
    @patch("preachpoint.helpers.client.requests.post")
    def test_get_commentary(self, mock_post):
        mock_post.return_value = mock_json_response({"commentary": "A commentary"})

        result = get_commentary("Psalms", 23, 1, end_verse=6, tone="pastoral", level="beginner", lang="af")

        assert result == "A commentary"
        payload = json.loads(mock_post.call_args.kwargs["data"])
        assert payload == {
            "book": "Psalms",
            "startChapter": 23,
            "startVerse": 1,
            "endVerse": 6,
            "tone": "pastoral",
            "level": "beginner",
            "lang": "af",
        }
        assert mock_post.call_args.kwargs["timeout"] == 120
