"""Pattern registry commands: list, add, remove."""

import typer
from rich.table import Table

from ._common import console, exit_with_error, get_settings
from ..exceptions import WdaptyError
from ..patterns import PatternStore

patterns_app = typer.Typer(
    help="Manage named path patterns",
    no_args_is_help=True,
)


def _store(ctx: typer.Context) -> PatternStore:
    return PatternStore(get_settings(ctx).pattern_store_path)


@patterns_app.command("list")
def list_patterns(ctx: typer.Context):
    """List every saved pattern."""
    store = _store(ctx)
    try:
        available = store.list()
    except WdaptyError as e:
        exit_with_error(e)

    if not available:
        console.print("[yellow]No patterns available in config.ini[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Patterns", show_lines=False, pad_edge=True)
    table.add_column("Name", style="bold")
    table.add_column("Value", style="cyan", overflow="fold")
    for name, value in available.items():
        table.add_row(name, value)

    console.print()
    console.print(table)
    console.print()


@patterns_app.command("add")
def add_pattern(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Pattern name"),
    value: str = typer.Option(..., "--value", help="Path template, may contain {placeholders}"),
):
    """Save a new pattern."""
    try:
        _store(ctx).add(name, value)
    except WdaptyError as e:
        exit_with_error(e)
    console.print(f"[green]Added pattern {name}[/green]")


@patterns_app.command("remove")
def remove_pattern(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Pattern name"),
):
    """Remove a pattern. Removing an unknown name is not an error."""
    try:
        _store(ctx).remove(name)
    except WdaptyError as e:
        exit_with_error(e)
    console.print(f"[green]Removed pattern {name}[/green]")
