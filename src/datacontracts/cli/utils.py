"""
CLI utility helpers — contract loading, input reading and output formatting.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from datacontracts.core.errors import ContractError, ContractNotFoundError
from datacontracts.schema.record import Record

console = Console()
err_console = Console(stderr=True)


# ── Contract loading ─────────────────────────────────────────────────────


def load_contract(target: str) -> type[Record]:
    """Import a record class from ``package.module:ClassName``.

    A dotted ``package.module.ClassName`` is accepted too.
    """
    if ":" in target:
        module_name, _, attribute_path = target.partition(":")
    else:
        module_name, _, attribute_path = target.rpartition(".")
    if not module_name or not attribute_path:
        raise ContractNotFoundError(target, "expected 'module:ClassName'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ContractNotFoundError(target, str(exc), cause=exc) from exc

    obj: Any = module
    for part in attribute_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ContractNotFoundError(target, f"no attribute '{part}'", cause=exc) from exc

    if not (isinstance(obj, type) and issubclass(obj, Record)):
        raise ContractNotFoundError(target, f"{obj!r} is not a record class")
    return obj


# ── Input ────────────────────────────────────────────────────────────────


def read_input(source: str) -> str:
    """Read JSON text from a path, or from stdin when ``source`` is ``-``."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        err_console.print(f"[bold red]Error[/bold red]: file not found: {source}")
        raise typer.Exit(code=2)
    return path.read_text(encoding="utf-8")


# ── Output helpers ───────────────────────────────────────────────────────


def fail(error: ContractError) -> None:
    """Print a contract error and exit with status 1."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {error.message}")
    raise typer.Exit(code=1)


def print_rows(rows: list[dict[str, Any]], *, title: str = "") -> None:
    """Render a list of flat dicts as a table."""
    if not rows:
        console.print("[dim]No members.[/dim]")
        return
    table = Table(title=title or None)
    for column in rows[0]:
        table.add_column(column.replace("_", " ").title())
    for row in rows:
        table.add_row(*(str(value) for value in row.values()))
    console.print(table)
