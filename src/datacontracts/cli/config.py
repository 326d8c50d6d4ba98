"""
CLI: ``datacontracts config`` — settings inspection.
"""

from __future__ import annotations

import typer

from datacontracts.cli.utils import console

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json, env"),
) -> None:
    """Show current configuration."""
    from datacontracts.core.settings import get_settings

    settings = get_settings()

    if format == "json":
        console.print_json(settings.model_dump_json())
        return

    if format == "env":
        for key, value in sorted(settings.model_dump().items()):
            console.print(f"DATACONTRACTS_{key.upper()}={'' if value is None else value}")
        return

    from rich.table import Table

    table = Table(title="Settings")
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in sorted(settings.model_dump().items()):
        table.add_row(key, str(value))
    console.print(table)
