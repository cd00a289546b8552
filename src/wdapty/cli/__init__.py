"""CLI entry point: the wdapty app and its subcommands."""

from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ..config import load_config
from ..exceptions import WdaptyError
from ..logging_config import setup_logging
from ._common import console, exit_with_error

app = typer.Typer(
    name="wdapty",
    help="wdapty - query local or S3-hosted tabular files through named path patterns",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"wdapty {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML format)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress all but ERROR logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Locate a file through a pattern, then download or search it."""
    setup_logging(verbose=verbose, quiet=quiet)
    try:
        settings = load_config(config_file=config)
    except WdaptyError as e:
        exit_with_error(e)
    ctx.obj = {"settings": settings}


# Import subcommands to register them
from .configure import configure as _configure  # noqa: F401, E402
from .patterns import patterns_app  # noqa: E402
from .processing import processing_app  # noqa: E402

app.add_typer(patterns_app, name="patterns")
app.add_typer(processing_app, name="processing")


def main() -> None:
    app(prog_name="wdapty")
