import json
from pathlib import Path

from click.testing import CliRunner as ClickRunner
from typer.testing import CliRunner

from ai_text_detector.cli import app
from ai_text_detector.profiles_cli import profiles_group

runner = CliRunner()

SAMPLE = (
    "Furthermore, the data demonstrates a clear trend. However, for example, the "
    "outliers remain. Finally, we conclude the study."
)


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_cli_analyze_file_outputs_json(tmp_path: Path):
    """analyze prints a JSON score breakdown for a text file."""
    path = _write(tmp_path, "sample.txt", SAMPLE)
    result = runner.invoke(app, ["analyze", str(path), "--language", "en", "--repeats"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert 0 <= payload["score"] <= 100
    assert payload["language"] == "en"
    assert set(payload["factors"]) == {
        "sentence_length",
        "vocabulary",
        "variance",
        "transitions",
        "density",
    }
    assert {"word": "the", "count": 3} in payload["repeating_words"]


def test_cli_analyze_reads_stdin():
    result = runner.invoke(app, ["analyze", "-"], input="First sentence. Second sentence with more words.")

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["features"]["word_count"] == 7
    assert payload["features"]["sentence_count"] == 2


def test_cli_compare_two_files(tmp_path: Path):
    first = _write(tmp_path, "a.txt", SAMPLE)
    second = _write(tmp_path, "b.txt", SAMPLE)
    result = runner.invoke(app, ["compare", str(first), str(second)])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["similarity"] == 1.0
    assert payload["score_difference"] == 0


def test_cli_highlight_json_and_html(tmp_path: Path):
    text = "Hi. The committee carefully reviewed every proposal submitted during the spring session."
    path = _write(tmp_path, "h.txt", text)

    result = runner.invoke(app, ["highlight", str(path), "-l", "en"])
    assert result.exit_code == 0
    segments = json.loads(result.stdout)["segments"]
    assert "".join(segment["text"] for segment in segments) == text
    assert [segment["is_flagged"] for segment in segments] == [False, True]

    html_result = runner.invoke(app, ["highlight", str(path), "-l", "en", "--html"])
    assert html_result.exit_code == 0
    assert '<span class="ai-highlight" data-score="85">' in html_result.stdout


def test_cli_detect_language(tmp_path: Path):
    path = _write(
        tmp_path,
        "ru.txt",
        "Мы были в городе весь день и вечером вернулись домой. Вы знаете, это было "
        "очень интересно.",
    )
    result = runner.invoke(app, ["detect-language", str(path)])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"language": "ru"}


def test_cli_print_config():
    """print-config command dumps the current configuration values."""
    result = runner.invoke(app, ["print-config"])

    assert result.exit_code == 0
    assert "highlight_threshold" in result.stdout
    assert "scoring:" in result.stdout


def test_cli_uses_config_file(tmp_path: Path):
    config = _write(tmp_path, "config.yaml", "highlight_threshold: 95\n")
    path = _write(tmp_path, "h.txt", "The committee carefully reviewed every proposal today.")
    result = runner.invoke(app, ["highlight", str(path), "--config", str(config)])

    assert result.exit_code == 0
    segments = json.loads(result.stdout)["segments"]
    assert not any(segment["is_flagged"] for segment in segments)


def test_cli_rejects_missing_input_and_bad_config(tmp_path: Path):
    missing = runner.invoke(app, ["analyze", str(tmp_path / "missing.txt")])
    assert missing.exit_code != 0

    bad = _write(tmp_path, "bad.yaml", "highlight_threshold: 500\n")
    sample = _write(tmp_path, "s.txt", SAMPLE)
    result = runner.invoke(app, ["analyze", str(sample), "--config", str(bad)])
    assert result.exit_code != 0


def test_profiles_group_lists_and_shows_profiles():
    """profiles group lists every bundled profile and shows one as JSON."""
    click_runner = ClickRunner()

    listing = click_runner.invoke(profiles_group, ["list"])
    assert listing.exit_code == 0
    assert "en\tEnglish" in listing.output
    assert "unknown\tUnknown (fallback)" in listing.output

    shown = click_runner.invoke(profiles_group, ["show", "DEU"])
    assert shown.exit_code == 0
    payload = json.loads(shown.output)
    assert payload["name"] == "German"
    assert "jedoch" in payload["groups"]["transitions"]["phrases"]

    unknown = click_runner.invoke(profiles_group, ["show", "xx"])
    assert unknown.exit_code != 0
    assert "No profile for language" in unknown.output
