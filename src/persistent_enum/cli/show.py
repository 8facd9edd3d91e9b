"""penum show command - list the members of every registered enum."""

import importlib
import json
from typing import Any

import click
import structlog
from rich.console import Console
from rich.table import Table

from persistent_enum.core.errors import PersistentEnumError
from persistent_enum.core.logging import get_log_file_path
from persistent_enum.db.store import open_store
from persistent_enum.enum.registry import EnumRegistry, type_name
from persistent_enum.enum.state import EnumState, state_of

logger = structlog.get_logger()


def _load_registry(target: str) -> EnumRegistry:
    module_name, sep, attr = target.partition(":")
    if not sep or not attr:
        raise click.BadParameter("expected MODULE:ATTRIBUTE", param_hint="TARGET")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import {module_name}: {e}", param_hint="TARGET") from e
    registry = getattr(module, attr, None)
    if not isinstance(registry, EnumRegistry):
        raise click.BadParameter(f"{target} is not an EnumRegistry", param_hint="TARGET")
    return registry


def _rows(model: type, state: EnumState) -> list[dict[str, Any]]:
    with open_store(state.database, model) as store:
        stored = set(store.pluck(store.ordinal_attr)) if store.table_exists() else None
    return [
        {
            "ordinal": ordinal,
            "name": getattr(member, state.name_attr),
            "active": ordinal in state.required_by_ordinal,
            "stored": None if stored is None else ordinal in stored,
        }
        for ordinal, member in state.by_ordinal.items()
    ]


@click.command()
@click.argument("target")
@click.option("--reinitialize", is_flag=True, help="Reload every enum from the database first")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show_command(target: str, reinitialize: bool, as_json: bool) -> None:
    """Show the members of the enums registered in TARGET.

    TARGET is MODULE:ATTRIBUTE naming an EnumRegistry; importing MODULE is
    expected to declare the enums.
    """
    registry = _load_registry(target)

    try:
        if reinitialize:
            registry.reinitialize_all()
        report = {}
        for model in registry.types():
            state = state_of(model)
            if state is not None:
                report[type_name(model)] = _rows(model, state)
    except PersistentEnumError as e:
        logger.error("enum_show_failed", target=target, error=e)
        message = e.message
        log_file = get_log_file_path()
        if log_file is not None:
            message += f" (see {log_file})"
        raise click.ClickException(message) from e

    if as_json:
        click.echo(json.dumps(report, indent=2, default=str))
        return

    if not report:
        click.echo("No enums registered.")
        return

    console = Console()
    for name, rows in report.items():
        table = Table(title=name)
        table.add_column("Ordinal", justify="right")
        table.add_column("Name")
        table.add_column("Active")
        table.add_column("Stored")
        for row in rows:
            stored = "-" if row["stored"] is None else ("yes" if row["stored"] else "missing")
            table.add_row(
                str(row["ordinal"]), str(row["name"]), "yes" if row["active"] else "no", stored
            )
        console.print(table)
