"""
Root Typer application for the datacontracts CLI.

Commands take a contract target ``package.module:ClassName`` and a JSON file
(``-`` for stdin)::

    datacontracts describe shop.models:Order
    datacontracts check shop.models:Order order.json
    datacontracts normalize shop.models:Order order.json --indent 2
    datacontracts config show --format json
"""

from __future__ import annotations

import json

import typer
from typer import Typer

from datacontracts import codec
from datacontracts.cli.utils import console, fail, load_contract, print_rows, read_input
from datacontracts.core.errors import ContractError, ErrorCategory
from datacontracts.core.logging import LogContext, configure_logging
from datacontracts.core.settings import get_settings
from datacontracts.engine import deserialize, find_first_invalid_field, serialize
from datacontracts.schema.resolver import effective_descriptors

app = Typer(
    name="datacontracts",
    help="datacontracts — inspect contracts and check JSON documents against them.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError, version as pkg_version

        from datacontracts import __version__

        try:
            v = pkg_version("datacontracts")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"datacontracts {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """datacontracts CLI — describe contracts, check and normalize JSON documents."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_format == "json")


# ── Commands ─────────────────────────────────────────────────────────────


@app.command("describe")
def describe(
    target: str = typer.Argument(..., help="Contract class, 'module:ClassName'"),
    as_json: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """List the effective members of a contract, subclass members first."""
    try:
        contract = load_contract(target)
    except ContractError as exc:
        fail(exc)

    rows = [d.to_dict() for d in effective_descriptors(contract).values()]
    if as_json:
        typer.echo(json.dumps(rows, indent=2))
        return
    print_rows(rows, title=contract.__qualname__)


def _hook_error(exc: Exception) -> ContractError:
    """Wrap an exception raised by a contract's validator or hook."""
    return ContractError(
        f"{type(exc).__name__} raised by contract code: {exc}",
        category=ErrorCategory.VALIDATION,
        cause=exc,
    )


@app.command("check")
def check(
    target: str = typer.Argument(..., help="Contract class, 'module:ClassName'"),
    source: str = typer.Argument(..., help="JSON file, or '-' for stdin"),
) -> None:
    """Deserialize a JSON document and validate it against a contract."""
    text = read_input(source)
    with LogContext(contract=target, source=source):
        try:
            contract = load_contract(target)
            tree = codec.loads(text)
        except ContractError as exc:
            fail(exc)

        try:
            failure = find_first_invalid_field(deserialize(contract, tree))
        except ContractError as exc:
            fail(exc)
        except Exception as exc:
            fail(_hook_error(exc))
    if failure is not None:
        console.print(
            f"[bold red]Invalid[/bold red]: member [bold]{failure.path}[/bold] "
            f"has value {failure.value!r}"
        )
        raise typer.Exit(code=1)
    console.print("[green]OK[/green]")


@app.command("normalize")
def normalize(
    target: str = typer.Argument(..., help="Contract class, 'module:ClassName'"),
    source: str = typer.Argument(..., help="JSON file, or '-' for stdin"),
    indent: int | None = typer.Option(None, "--indent", "-i", help="Indent output"),  # noqa: UP007
) -> None:
    """Round-trip a JSON document through a contract and print the result."""
    text = read_input(source)
    with LogContext(contract=target, source=source):
        try:
            contract = load_contract(target)
            tree = codec.loads(text)
        except ContractError as exc:
            fail(exc)

        try:
            output = codec.dumps(serialize(deserialize(contract, tree)), indent=indent)
        except ContractError as exc:
            fail(exc)
        except Exception as exc:
            fail(_hook_error(exc))
        typer.echo(output)


# ── Sub-command registration ─────────────────────────────────────────────

from datacontracts.cli.config import app as config_app  # noqa: E402

app.add_typer(config_app, name="config", help="Configuration inspection.")
