"""Processing commands: download a whole file or search it by index."""

from typing import List, Optional

import typer

from ._common import console, exit_with_error, get_settings, parse_bindings, split_columns
from ..exceptions import WdaptyError
from ..formatters import get_formatter
from ..patterns import ChainPrompter, ConsolePrompter, PatternStore, TemplateExpander
from ..query import QueryBuilder, QuerySpec

processing_app = typer.Typer(
    help="Download or search a tabular file",
    no_args_is_help=True,
)

PROFILE_OPTION = typer.Option(
    None, "--profile", "-p", help="Credentials profile for S3 sources (default: default)"
)
PATTERN_OPTION = typer.Option(
    None, "--pattern", help="Name of a saved pattern to build the file path from"
)
EXECUTION_TYPE_OPTION = typer.Option(
    None, "--execution-type", "-e", help="File reader to use (default: parq)"
)
FILE_NAME_OPTION = typer.Option(
    None, "--file-name", help="Local path or s3:// URL of the file"
)
VAR_OPTION = typer.Option(
    None, "--var", help="Pre-bound pattern placeholder as name=value (repeatable)"
)


def _execute(
    ctx: typer.Context,
    spec: QuerySpec,
    output_file: Optional[str],
    var: Optional[List[str]],
) -> None:
    settings = get_settings(ctx)
    spec.profile = spec.profile or settings.default_profile
    spec.execution_type = spec.execution_type or settings.execution_type
    spec.provider = settings.provider

    expander = TemplateExpander(ChainPrompter(parse_bindings(var), ConsolePrompter(console)))
    builder = QueryBuilder(
        spec,
        store=PatternStore(settings.pattern_store_path),
        expander=expander,
        credentials_path=settings.credentials_path,
        formatter=get_formatter(output_file, console),
    )

    try:
        df = builder.run()
    except WdaptyError as e:
        exit_with_error(e)

    if output_file:
        console.print(f"[green]Saved {df.height} rows to {output_file}[/green]")


@processing_app.command()
def download(
    ctx: typer.Context,
    output_file: str = typer.Option(..., "--output-file", help="CSV file to write"),
    profile: Optional[str] = PROFILE_OPTION,
    pattern: Optional[str] = PATTERN_OPTION,
    execution_type: Optional[str] = EXECUTION_TYPE_OPTION,
    file_name: Optional[str] = FILE_NAME_OPTION,
    var: Optional[List[str]] = VAR_OPTION,
):
    """Save the whole file as CSV."""
    spec = QuerySpec(
        source_path=file_name,
        pattern=pattern,
        profile=profile,
        execution_type=execution_type,
    )
    _execute(ctx, spec, output_file, var)


@processing_app.command()
def search(
    ctx: typer.Context,
    index_name: str = typer.Option(..., "--index-name", help="Datetime column to match"),
    index_value: str = typer.Option(
        ..., "--index-value", help="Value to match, as 'YYYY-MM-DD hh:mm:ss'"
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output-file", help="CSV file to write (default: print a table)"
    ),
    cols: Optional[List[str]] = typer.Option(
        None, "--cols", help="Columns to keep (repeatable or comma separated)"
    ),
    profile: Optional[str] = PROFILE_OPTION,
    pattern: Optional[str] = PATTERN_OPTION,
    execution_type: Optional[str] = EXECUTION_TYPE_OPTION,
    file_name: Optional[str] = FILE_NAME_OPTION,
    var: Optional[List[str]] = VAR_OPTION,
):
    """Keep the rows whose index column equals the given datetime."""
    spec = QuerySpec(
        source_path=file_name,
        pattern=pattern,
        index_name=index_name,
        index_value=index_value,
        columns=split_columns(cols),
        profile=profile,
        execution_type=execution_type,
    )
    _execute(ctx, spec, output_file, var)
