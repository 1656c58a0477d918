#!/usr/bin/env python3
"""
Intent CLI - developer tooling for the intent test engine

Usage:
    intent strategies
    intent validate <settings.yaml>
    intent info
    intent --version
"""

import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import load_settings
from .strategies import StrategyKind, default_registry

app = typer.Typer(
    name="intent",
    help="Intent - composable test specifications and expectations",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"Intent v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level", "-l",
        help="Log level for intent's own logging"
    ),
):
    """
    Intent - composable test specifications and expectations

    Inspect the strategy registry and validate settings files.
    """
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _describe_key(key: Any) -> str:
    if isinstance(key, type):
        return key.__qualname__
    return getattr(key, "_name", None) or repr(key)


@app.command()
def strategies():
    """
    List the strategies in the default registry.
    """
    registry = default_registry()
    equalities = registry.keys(StrategyKind.EQUALITY)
    formatters = registry.keys(StrategyKind.FORMATTER)

    table = Table(title="Strategies")
    table.add_column("Type", style="cyan")
    table.add_column("Equality", style="magenta")
    table.add_column("Formatter")

    for key in dict.fromkeys([*equalities, *formatters]):
        equality = type(registry.equality(key)).__name__ if key in equalities else "-"
        formatter = type(registry.formatter(key)).__name__ if key in formatters else "-"
        table.add_row(_describe_key(key), equality, formatter)

    for origin in registry.composite_origins():
        table.add_row(f"{_describe_key(origin)}[T]", "composite", "composite")

    console.print(table)


@app.command()
def validate(
    settings_file: Path = typer.Argument(
        ...,
        help="Path to the settings YAML file",
        exists=True,
        readable=True,
    ),
):
    """
    Validate a settings YAML file.
    """
    console.print(f"\nValidating: {settings_file}")

    settings, validation = load_settings(settings_file)

    if validation.is_valid:
        console.print("\n[green]Valid settings[/green]")
        console.print(f"   contains_diagnostic_limit: {settings.contains_diagnostic_limit}")
        console.print(f"   compound_policy: {settings.compound_policy.value}")
        console.print(f"   log_level: {settings.log_level}")
        raise typer.Exit(code=0)
    else:
        console.print("\n[red]Validation failed:[/red]")
        console.print(str(validation), markup=False)
        raise typer.Exit(code=1)


@app.command()
def info():
    """
    Show information about Intent.
    """
    console.print(f"""
[bold]Intent[/bold] v{__version__}

Composable test specifications and expectations

[bold]Features:[/bold]
  • Nested, named setup blocks folded into per-test state
  • Awaitable expectations: equals, contains, completes_with
  • Negation and compound expectations
  • Pluggable per-type equality and formatting strategies
""")


if __name__ == "__main__":
    app()
