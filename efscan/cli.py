"""Command-line interface for the card scanner."""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .core.layout import load_stat_aliases
from .core.types import ExtractionResult, StatKey, stat_map_to_dict
from .ocr.normalizer import normalize
from .ocr.pipeline import ExtractionOrchestrator
from .utils.config import settings
from .utils.error_handler import CardScanError, RecognitionUnavailableError
from .utils.log import configure_logging, get_logger

logger = get_logger(__name__)

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="efscan",
    help="Extract player fields and ability scores from eFootball card screenshots",
    add_completion=False
)


@app.callback()
def main(
    log_level: str = typer.Option(settings.LOG_LEVEL, "--log-level", help="Log level (DEBUG, INFO, WARNING, ...)"),
    log_json: bool = typer.Option(settings.LOG_JSON, "--log-json/--log-console", help="Structured JSON logs"),
):
    configure_logging(level=log_level, json_output=log_json)


def _read_images(paths: List[Path]) -> List[bytes]:
    missing = [str(path) for path in paths if not path.is_file()]
    if missing:
        err_console.print(f"[red]❌ Image not found: {', '.join(missing)}[/red]")
        raise typer.Exit(1)
    return [path.read_bytes() for path in paths]


def _echo_json(data: Dict[str, Any]):
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


def _run(coro):
    try:
        return asyncio.run(coro)
    except RecognitionUnavailableError as e:
        err_console.print(f"[red]❌ OCR backend unavailable: {e}[/red]")
        err_console.print("[dim]Install tesseract with the jpn language data or set TESSERACT_PATH[/dim]")
        raise typer.Exit(2)
    except CardScanError as e:
        err_console.print(f"[red]❌ {e}[/red]")
        logger.error("Extraction failed", error=str(e))
        raise typer.Exit(1)


def _card_table(result: ExtractionResult) -> Table:
    table = Table(title="Card Results")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Player Name", result.name_text or "[red]Not detected[/red]")
    table.add_row("Team", result.team_text or "[red]Not detected[/red]")
    table.add_row("Nationality", result.nationality_text or "[red]Not detected[/red]")
    table.add_row("Card Edition", result.card_edition_text or "[red]Not detected[/red]")
    return table


@app.command()
def card(
    image: Path = typer.Argument(..., help="Screenshot of the player card"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Per-region OCR timeout in seconds"),
):
    """Read name, team, nationality and card edition from a card screenshot."""
    image_bytes = _read_images([image])[0]
    orchestrator = ExtractionOrchestrator(timeout=timeout)
    result = _run(orchestrator.analyze_card(image_bytes))

    if as_json:
        _echo_json(result.to_dict())
        return

    console.print(_card_table(result))
    if not result.card_edition_text:
        console.print("[yellow]💡 Tip: Card edition not found - check that the edition banner is visible[/yellow]")


@app.command()
def stats(
    images: List[Path] = typer.Argument(..., help="Stat screenshots, highest priority first"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Per-image OCR timeout in seconds"),
):
    """Read ability scores from one or more stat-screen screenshots."""
    image_bytes = _read_images(images)
    orchestrator = ExtractionOrchestrator(timeout=timeout)
    stat_map = _run(orchestrator.analyze_stats(image_bytes))
    data = stat_map_to_dict(stat_map)

    if as_json:
        _echo_json(data)
        return

    table = Table(title=f"Ability Scores ({len(data)}/{len(StatKey)})")
    table.add_column("Stat", style="cyan")
    table.add_column("Value", style="white", justify="right")
    for key in StatKey:
        table.add_row(key.value, str(data[key.value]) if key.value in data else "[red]-[/red]")
    console.print(table)


@app.command("normalize")
def normalize_text(text: str = typer.Argument(..., help="Text to fold")):
    """Show the comparison form of a label or recognized line."""
    typer.echo(normalize(text))


@app.command()
def aliases(as_json: bool = typer.Option(False, "--json", help="Print the table as JSON")):
    """List the stat alias table with normalized forms."""
    table_data = load_stat_aliases()

    if as_json:
        _echo_json({key.value: list(values) for key, values in table_data.items()})
        return

    table = Table(title="Stat Aliases")
    table.add_column("Stat", style="cyan")
    table.add_column("Aliases", style="white")
    table.add_column("Normalized", style="dim")
    for key, values in table_data.items():
        table.add_row(key.value, ", ".join(values), ", ".join(normalize(value) for value in values))
    console.print(table)


if __name__ == "__main__":
    app()
