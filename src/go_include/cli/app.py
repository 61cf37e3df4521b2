import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from go_include.config import get_default_build_tag
from go_include.core.ports.formatter import Formatter
from go_include.core.transform import transform_file
from go_include.errors import IncludeError
from go_include.formatter import GoimportsFormatter, IdentityFormatter
from go_include.models import Options

EXIT_MISSING_INPUT = 1
EXIT_TRANSFORM_FAILED = 2
EXIT_WRITE_FAILED = 3

_PROG = "go-include"

app = typer.Typer(
    name=_PROG,
    help="Replace include.String/include.Bytes placeholders in a Go file with the included content.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
err_console = Console(stderr=True)


def _get_formatter(no_format: bool) -> Formatter:
    if no_format:
        return IdentityFormatter()
    return GoimportsFormatter()


def _error(message: str) -> None:
    err_console.print(f"{_PROG}: {message}", style="red", markup=False, highlight=False, soft_wrap=True)


@app.command()
def generate(
    ctx: typer.Context,
    inputs: Annotated[
        list[str] | None, typer.Argument(metavar="INPUT", help="Go source file to process (exactly one).")
    ] = None,
    out: Annotated[
        str | None, typer.Option("--out", "-o", help="Name of the output file to write to (default: stdout).")
    ] = None,
    buildtag: Annotated[
        str | None, typer.Option(help="Build tag to deactivate in the generated source (default: include).")
    ] = None,
    workdir: Annotated[
        str | None, typer.Option(help="Directory to resolve included file names against (default: cwd).")
    ] = None,
    no_format: Annotated[bool, typer.Option("--no-format", help="Skip the goimports pass.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log every edit to stderr.")] = False,
) -> None:
    """Generate the expanded variant of INPUT."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not inputs or len(inputs) != 1:
        _error("Missing input file" if not inputs else f"Expected exactly one input file, got {len(inputs)}")
        err_console.print(ctx.get_usage(), markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(EXIT_MISSING_INPUT)

    options = Options(tag=buildtag or get_default_build_tag(), working_dir=workdir)
    try:
        result = transform_file(inputs[0], options, _get_formatter(no_format))
    except IncludeError as e:
        _error(str(e))
        raise typer.Exit(EXIT_TRANSFORM_FAILED) from e

    if out is None:
        typer.echo(result, nl=False)
        return

    try:
        Path(out).write_bytes(result)
    except OSError as e:
        _error(f"Failed to write {out}: {e.strerror or e}")
        raise typer.Exit(EXIT_WRITE_FAILED) from e


def main() -> None:
    app()
