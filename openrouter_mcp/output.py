"""Rich console output for the terminal commands."""

from typing import Any

from rich.console import Console
from rich.json import JSON
from rich.markdown import Markdown
from rich.table import Table

console = Console(legacy_windows=False)


def _price_per_million(pricing: dict[str, Any] | None, key: str) -> str:
    """Per-token USD price string -> '$X.XX' per million tokens."""
    if not pricing or pricing.get(key) in (None, ""):
        return "-"
    try:
        per_token = float(pricing[key])
    except (TypeError, ValueError):
        return str(pricing[key])
    if per_token == 0:
        return "free"
    return f"${per_token * 1_000_000:.2f}"


def print_models_table(models: list[dict[str, Any]]) -> None:
    table = Table(title=f"{len(models)} models", show_lines=False)
    table.add_column("ID", style="bold")
    table.add_column("Context", justify="right")
    table.add_column("Prompt $/M", justify="right")
    table.add_column("Completion $/M", justify="right")
    for m in sorted(models, key=lambda e: str(e.get("id", ""))):
        context = m.get("context_length")
        table.add_row(
            str(m.get("id", "")),
            f"{context:,}" if isinstance(context, int) else "-",
            _price_per_million(m.get("pricing"), "prompt"),
            _price_per_million(m.get("pricing"), "completion"),
        )
    console.print(table)


def print_report(text: str) -> None:
    console.print(Markdown(text))


def print_json(text: str) -> None:
    console.print(JSON(text))
