"""Shared CLI helpers."""

from typing import Dict, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import Settings

console = Console()
err_console = Console(stderr=True)


def get_settings(ctx: typer.Context) -> Settings:
    """Settings loaded by the top-level callback."""
    return ctx.obj["settings"]


def describe_error(error: BaseException) -> str:
    """Render ``error`` and every exception it was raised from."""
    parts = [str(error) or type(error).__name__]
    cause = error.__cause__
    while cause is not None:
        parts.append(str(cause) or type(cause).__name__)
        cause = cause.__cause__
    return ": ".join(parts)


def exit_with_error(error: BaseException) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(describe_error(error))}")
    raise typer.Exit(1)


def split_columns(cols: Optional[List[str]]) -> Optional[List[str]]:
    """Accept ``--cols a --cols b`` as well as ``--cols a,b``."""
    if not cols:
        return None
    names = [name.strip() for value in cols for name in value.split(",")]
    return [name for name in names if name] or None


def parse_bindings(values: Optional[List[str]]) -> Dict[str, str]:
    """Turn repeated ``--var name=value`` options into a mapping."""
    bindings: Dict[str, str] = {}
    for item in values or []:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"expected name=value, got '{item}'", param_hint="--var")
        bindings[name.strip()] = value.strip()
    return bindings
