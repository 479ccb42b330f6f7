# -*- coding: utf-8 -*-
"""
Unit Converter CLI
==================

Invocation modes:
    unitconv                      interactive menu
    unitconv VALUE FROM TO        one conversion, recorded in the history
    unitconv --info UNIT          unit information
    unitconv --list-units         table of every unit
    unitconv --history            print the history log
    unitconv --export-csv PATH    export the history as CSV
    unitconv --clear-history      empty the history log
"""

import dataclasses
import logging
from pathlib import Path
from typing import List, Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from unitconv._version import __version__
from unitconv.calculation.unit_converter import parse_number
from unitconv.cli.interactive import InteractiveSession
from unitconv.config import UnitConvConfig, get_config
from unitconv.engine import Engine
from unitconv.exceptions import ConversionError, ParseNumberError, UnknownUnitError
from unitconv.formatting import format_number

logger = logging.getLogger(__name__)

USAGE = "Usage: unitconv [OPTIONS] [VALUE FROM_UNIT TO_UNIT]"

app = typer.Typer(
    name="unitconv",
    help="Terminal unit converter with persistent history",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _configure_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_config(config_file: Optional[Path], history_file: Optional[Path]) -> UnitConvConfig:
    try:
        config = UnitConvConfig.from_file(config_file) if config_file else get_config()
    except (OSError, ValueError, yaml.YAMLError) as e:
        err_console.print(f"[red]Error:[/red] Could not load config: {escape(str(e))}")
        raise typer.Exit(1)
    if history_file is not None:
        config = dataclasses.replace(config, history_file=str(history_file))
    return config


def _fail(message: str, code: int = 1) -> None:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code)


def _warn_persistence(engine: Engine) -> None:
    error = engine.history.last_error
    if error is not None:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(error.message)}")


@app.command(context_settings={"ignore_unknown_options": True})
def convert(
    args: Optional[List[str]] = typer.Argument(
        None,
        metavar="[VALUE FROM_UNIT TO_UNIT]",
        help="Convert VALUE from FROM_UNIT to TO_UNIT and exit",
        show_default=False,
    ),
    history_file: Optional[Path] = typer.Option(
        None, "--history-file", help="History log to read and append to"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="YAML configuration file"
    ),
    info: Optional[str] = typer.Option(None, "--info", help="Show information about a unit"),
    list_units: bool = typer.Option(False, "--list-units", help="List every supported unit"),
    show_history: bool = typer.Option(False, "--history", help="Print the conversion history"),
    export_csv: Optional[Path] = typer.Option(
        None, "--export-csv", help="Export the conversion history to a CSV file"
    ),
    clear_history: bool = typer.Option(False, "--clear-history", help="Empty the conversion history"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """Convert values between units of the same category.

    Without arguments an interactive menu starts.
    """
    if version:
        console.print(f"unitconv v{__version__}")
        raise typer.Exit(0)

    args = args or []
    config = _load_config(config_file, history_file)
    _configure_logging(config.log_level, verbose)

    informational = info or list_units or show_history or export_csv or clear_history
    if args and (len(args) != 3 or informational):
        err_console.print(USAGE)
        err_console.print("Expected exactly three arguments: VALUE FROM_UNIT TO_UNIT")
        raise typer.Exit(2)

    if len(args) == 3:
        _direct(config, *args)
        return

    if informational:
        _informational(config, info, list_units, show_history, export_csv, clear_history)
        return

    engine = Engine.from_config(config)
    try:
        InteractiveSession(engine, console=console).run()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(130)


def _direct(config: UnitConvConfig, raw_value: str, from_unit: str, to_unit: str) -> None:
    """Convert once, print ``<value> <from> = <result> <to>`` and record it."""
    try:
        value = parse_number(raw_value)
    except ParseNumberError as e:
        _fail(e.message)

    engine = Engine.from_config(config)
    try:
        result = engine.convert(value, from_unit, to_unit)
    except ConversionError as e:
        _fail(e.message)

    console.print(
        f"{format_number(result.value)} {result.from_token} = "
        f"{format_number(result.result)} {result.to_token}",
        markup=False,
        highlight=False,
    )
    if result.precision_warning:
        err_console.print("[yellow]Warning:[/yellow] very large magnitude; result may have lost precision")
    _warn_persistence(engine)


def _informational(
    config: UnitConvConfig,
    info: Optional[str],
    list_units: bool,
    show_history: bool,
    export_csv: Optional[Path],
    clear_history: bool,
) -> None:
    engine = Engine.from_config(config)

    if info:
        try:
            unit = engine.describe(info)
        except UnknownUnitError:
            _fail(f"Unit not found: '{info}'")
        console.print("\n[bold]Unit Information:[/bold]")
        console.print(f"Name: {escape(unit.name)}")
        console.print(f"Symbol: {escape(unit.symbol)}")
        console.print(f"Category: {unit.category.value}")
        if unit.description:
            console.print(f"Description: {escape(unit.description)}")
        if unit.factor is not None:
            console.print(f"Factor: {unit.factor:.10g}")
        if unit.aliases:
            console.print(f"Aliases: {escape(', '.join(unit.aliases))}")

    if list_units:
        table = Table(title="Supported units")
        table.add_column("Category", style="cyan")
        table.add_column("Symbol", style="green")
        table.add_column("Name")
        table.add_column("Description")
        for unit in engine.units():
            table.add_row(
                unit.category.value, escape(unit.symbol), escape(unit.name), escape(unit.description)
            )
        console.print(table)

    if show_history:
        if len(engine.history) == 0:
            console.print("No conversion history available!")
        else:
            console.print(InteractiveSession(engine, console=console).history_table())

    if export_csv is not None:
        if not engine.export_history(export_csv):
            _fail(engine.history.last_error.message)
        console.print(f"History exported to {escape(str(export_csv))}")

    if clear_history:
        engine.clear_history()
        _warn_persistence(engine)
        console.print("History cleared!")


def main():
    """Main entry point for the unitconv command"""
    app()


if __name__ == "__main__":
    main()
