from unittest.mock import patch

from click.testing import CliRunner

from preachpoint.cli import cli
from preachpoint.server.server import HealthResponse


class TestPassageCommand:
    @patch("preachpoint.cli.get_passage")
    def test_passage_range(self, mock_get_passage):
        mock_get_passage.return_value = "1:31 And God saw\n2:1 Thus the heavens"

        result = CliRunner().invoke(
            cli, ["passage", "-b", "Genesis", "-s", "1:31", "--end", "2:1"]
        )

        assert result.exit_code == 0
        assert "2:1 Thus the heavens" in result.output
        mock_get_passage.assert_called_once_with(
            "Genesis", 1, 31, 2, 1, base_url=None, translate=False
        )

    @patch("preachpoint.cli.get_passage")
    def test_passage_single_verse_translated(self, mock_get_passage):
        mock_get_passage.return_value = "3:16 Want so lief"

        result = CliRunner().invoke(
            cli, ["passage", "-b", "John", "-s", "3:16", "--translate"]
        )

        assert result.exit_code == 0
        mock_get_passage.assert_called_once_with(
            "John", 3, 16, None, None, base_url=None, translate=True
        )

    def test_passage_bad_reference(self):
        result = CliRunner().invoke(cli, ["passage", "-b", "John", "-s", "3"])
        assert result.exit_code == 2
        assert "CHAPTER:VERSE" in result.output

    @patch("preachpoint.cli.get_passage")
    def test_passage_error(self, mock_get_passage):
        mock_get_passage.side_effect = Exception("400 Client Error")

        result = CliRunner().invoke(cli, ["passage", "-b", "Tobit", "-s", "1:1"])

        assert result.exit_code == 1


@patch("preachpoint.cli.get_commentary")
def test_commentary_command(mock_get_commentary):
    mock_get_commentary.return_value = "The Lord is my shepherd..."

    result = CliRunner().invoke(
        cli,
        ["commentary", "-b", "Psalms", "-s", "23:1", "--end", "23:6", "--lang", "af"],
    )

    assert result.exit_code == 0
    assert mock_get_commentary.call_args.kwargs["lang"] == "af"
    assert mock_get_commentary.call_args.kwargs["tone"] == "teaching"
    assert mock_get_commentary.call_args.kwargs["level"] == "short"


@patch("preachpoint.cli.health_check")
def test_health_command(mock_health_check):
    mock_health_check.return_value = HealthResponse(status="healthy", books_loaded=66)

    result = CliRunner().invoke(cli, ["health"])

    assert result.exit_code == 0
    assert "Server Status: healthy (66 books)" in result.output


@patch("preachpoint.cli.list_chapters")
def test_chapters_command(mock_list_chapters):
    mock_list_chapters.return_value = [1, 2, 3, 4]

    result = CliRunner().invoke(cli, ["chapters", "-b", "Ruth"])

    assert result.exit_code == 0
    assert result.output.strip() == "1 2 3 4"


@patch("preachpoint.helpers.data_processing.write_kjv_document")
def test_build_data_command(mock_write, tmp_path):
    source = tmp_path / "pg10.txt"
    source.write_text("")
    mock_write.return_value = 66

    result = CliRunner().invoke(
        cli, ["build-data", "-g", str(source), "-o", str(tmp_path / "kjv.json")]
    )

    assert result.exit_code == 0
    assert "Saved 66 books" in result.output
    mock_write.assert_called_once_with(str(source), str(tmp_path / "kjv.json"))
