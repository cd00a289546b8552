"""Configure command: creates the pattern store and seeds it."""

from typing import List, Optional

import typer
from rich.prompt import Prompt

from . import app
from ._common import console, exit_with_error, get_settings
from ..exceptions import WdaptyError
from ..patterns import PatternStore

EXIT_WORD = "x"


def ask_for_patterns() -> List[str]:
    """Prompt for ``name=value`` lines until the user types ``x``."""
    console.print(
        "Fill in your config with your patterns, in the format name=value. "
        f"Type [bold]{EXIT_WORD}[/bold] to exit."
    )
    entries: List[str] = []
    while True:
        try:
            answer = Prompt.ask(
                "Paste the file pattern you want to use, one at a time", console=console
            )
        except EOFError:
            break
        answer = answer.strip()
        if answer == EXIT_WORD:
            break
        if answer:
            entries.append(answer)
    return entries


@app.command()
def configure(
    ctx: typer.Context,
    patterns: Optional[List[str]] = typer.Option(
        None,
        "--patterns",
        help="Pattern to save as name=value (repeatable). Prompts when omitted.",
    ),
):
    """Create ~/.wdapty/config.ini and save the given patterns."""
    store = PatternStore(get_settings(ctx).pattern_store_path)
    entries = patterns if patterns else ask_for_patterns()

    try:
        path = store.initialize(entries)
    except WdaptyError as e:
        exit_with_error(e)

    console.print(f"[green]Saved config.ini in {path}[/green]")
