import json
import os
from typing import Optional

import requests

from preachpoint.constants import PREACHPOINT_SERVER_DEFAULT_BASE_URL
from preachpoint.server.server import HealthResponse


def _get_base_url(explicit: Optional[str] = None) -> str:
    """Resolve the server base URL.

    Priority: explicit arg > PREACHPOINT_API_URL env var > PREACHPOINT_SERVER_DEFAULT_BASE_URL
    """
    if explicit:
        return explicit.rstrip("/")
    env_val = os.getenv("PREACHPOINT_API_URL")
    return (env_val or PREACHPOINT_SERVER_DEFAULT_BASE_URL).rstrip("/")


def _passage_payload(
    book: str,
    start_chapter: int,
    start_verse: int,
    end_chapter: Optional[int] = None,
    end_verse: Optional[int] = None,
) -> dict:
    if not book or not book.strip():
        raise ValueError("book must be a non-empty string")
    payload = {"book": book, "startChapter": start_chapter, "startVerse": start_verse}
    if end_chapter is not None:
        payload["endChapter"] = end_chapter
    if end_verse is not None:
        payload["endVerse"] = end_verse
    return payload


def _post(path: str, payload: dict, base_url: Optional[str], timeout: int) -> dict:
    resp = requests.post(
        f"{_get_base_url(base_url)}{path}",
        headers={"Content-Type": "application/json"},
        data=json.dumps(payload),
        timeout=timeout,
    )
    # Raise for non-2xx; the server error payload is shown in the HTTPError
    resp.raise_for_status()
    return resp.json()


def health_check(base_url: Optional[str] = None) -> HealthResponse:
    """Call the server health endpoint and return the parsed status."""
    url = f"{_get_base_url(base_url)}/health"
    resp = requests.get(url, timeout=30)
    resp.raise_for_status()
    return HealthResponse(**resp.json())


def list_books(base_url: Optional[str] = None) -> list[str]:
    resp = requests.get(f"{_get_base_url(base_url)}/api/books", timeout=30)
    resp.raise_for_status()
    return resp.json()["books"]


def list_chapters(book: str, base_url: Optional[str] = None) -> list[int]:
    resp = requests.get(
        f"{_get_base_url(base_url)}/api/chapters", params={"book": book}, timeout=30
    )
    resp.raise_for_status()
    return resp.json()["chapters"]


def get_passage(
    book: str,
    start_chapter: int,
    start_verse: int,
    end_chapter: Optional[int] = None,
    end_verse: Optional[int] = None,
    base_url: Optional[str] = None,
    translate: bool = False,
) -> str:
    """Fetch the passage text, or its Afrikaans translation when `translate` is set.

    Expects the server to respond with {"text": "..."} or {"translation": "..."}.
    """
    payload = _passage_payload(book, start_chapter, start_verse, end_chapter, end_verse)
    if translate:
        data = _post("/api/translate", payload, base_url, timeout=120)
        text = data.get("translation")
    else:
        data = _post("/api/verses", payload, base_url, timeout=30)
        text = data.get("text")

    if not isinstance(text, str):
        raise ValueError(f"Unexpected response format: {data}")
    return text


def get_commentary(
    book: str,
    start_chapter: int,
    start_verse: int,
    end_chapter: Optional[int] = None,
    end_verse: Optional[int] = None,
    tone: Optional[str] = None,
    level: Optional[str] = None,
    lang: str = "en",
    base_url: Optional[str] = None,
) -> str:
    payload = _passage_payload(book, start_chapter, start_verse, end_chapter, end_verse)
    payload.update({"tone": tone, "level": level, "lang": lang})
    data = _post("/api/commentary", payload, base_url, timeout=120)
    commentary = data.get("commentary")
    if not isinstance(commentary, str):
        raise ValueError(f"Unexpected response format: {data}")
    return commentary
