from __future__ import annotations

import json
from dataclasses import replace as dc_replace
from pathlib import Path
from typing import Any

import typer
import yaml

from .config import configure_logging, load_config
from .detector import Detector, render_highlight
from .errors import ConfigError

app = typer.Typer(help="AI text detector CLI.", no_args_is_help=True)

STDIN_MARKER = "-"


def _read_input(source: str) -> str:
    """Read text from a file path, or from stdin when source is '-'."""
    if source == STDIN_MARKER:
        return typer.get_text_stream("stdin").read()
    path = Path(source)
    if not path.is_file():
        raise typer.BadParameter(f"Input file {source!r} does not exist.")
    return path.read_text(encoding="utf-8")


def _build_detector(config_path: Path | None, language: str | None) -> Detector:
    try:
        cfg = load_config(config_path)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    if language:
        cfg = dc_replace(cfg, default_language=language)
    configure_logging(cfg)
    return Detector(cfg)


def _emit(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def analyze(
    source: str = typer.Argument(..., help="Text file to analyze, or '-' for stdin."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    language: str | None = typer.Option(
        None, "--language", "-l", help="Language code (e.g. 'en', 'DEU'); detected when omitted."
    ),
    repeats: bool = typer.Option(
        False, "--repeats/--no-repeats", help="Include frequently repeated words."
    ),
) -> None:
    """Score a text and emit the result as JSON."""
    detector = _build_detector(config, language)
    text = _read_input(source)
    payload = detector.analyze(text).to_dict()
    if repeats:
        payload["repeating_words"] = [
            {"word": word, "count": count} for word, count in detector.repeating_words(text)
        ]
    _emit(payload)


@app.command()
def compare(
    first: str = typer.Argument(..., help="First text file, or '-' for stdin."),
    second: str = typer.Argument(..., help="Second text file, or '-' for stdin."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    language: str | None = typer.Option(None, "--language", "-l"),
) -> None:
    """Analyze two texts and report their scores and vocabulary similarity."""
    if first == STDIN_MARKER and second == STDIN_MARKER:
        raise typer.BadParameter("Only one of the inputs may be read from stdin.")
    detector = _build_detector(config, language)
    result = detector.compare(_read_input(first), _read_input(second))
    _emit(result.to_dict())


@app.command()
def highlight(
    source: str = typer.Argument(..., help="Text file to highlight, or '-' for stdin."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    language: str | None = typer.Option(None, "--language", "-l"),
    html: bool = typer.Option(False, "--html", help="Emit HTML markup instead of JSON."),
) -> None:
    """Score each sentence separately and flag the likely generated ones."""
    detector = _build_detector(config, language)
    segments = detector.highlight(_read_input(source))
    if html:
        typer.echo(render_highlight(segments))
        return
    _emit({"segments": [segment.to_dict() for segment in segments]})


@app.command("detect-language")
def detect_language(
    source: str = typer.Argument(..., help="Text file, or '-' for stdin."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
) -> None:
    """Print the detected language code as JSON."""
    detector = _build_detector(config, None)
    _emit({"language": detector.detect_language(_read_input(source))})


@app.command("print-config")
def print_config(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
) -> None:
    """Print the effective configuration as YAML."""
    try:
        cfg = load_config(config)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
