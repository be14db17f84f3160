from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.table import Table

try:
    import typer.rich_utils as tru
except ModuleNotFoundError:  # pragma: no cover - older Typer versions
    tru = None

from grimscribe.config_env import load_env
from grimscribe.documents import NoDocumentsError, convert_documents
from grimscribe.logging import configure_logging
from grimscribe.settings import ConvertOptions
from grimscribe.tags import RULE_TABLE, transform

if tru is not None:  # pragma: no branch
    tru.Panel = partial(tru.Panel, box=box.ASCII)


app = typer.Typer(
    no_args_is_help=True,
    help="Render 5eTools-style {@tag} markup into plain, lightly formatted text.",
)


@app.callback()
def main() -> None:
    """grimscribe - 5eTools tag renderer."""
    load_env()


@app.command()
def convert(
    input: Path = typer.Argument(..., help="Input file or folder of JSON/YAML documents"),
    key: str = typer.Argument(..., envvar="GRIMSCRIBE_KEY", help="Field to render in each document"),
    output: Path = typer.Argument(..., envvar="GRIMSCRIBE_OUTPUT", help="Output folder"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="More logging (-vv for debug)"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """Render one field of every document and write it to OUTPUT."""
    verbosity = -1 if quiet else verbose
    configure_logging(verbosity)
    try:
        options = ConvertOptions(input=input, key=key, output=output, verbosity=verbosity)
    except ValidationError as e:
        msgs = "\n".join(f"- {err['loc'][0]}: {err['msg']}" for err in e.errors())
        typer.secho(f"ERR: invalid options\n{msgs}", fg=typer.colors.RED, err=True)
        raise typer.Exit(2)

    try:
        report = convert_documents(options)
    except NoDocumentsError as e:
        typer.secho(f"ERR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(2)

    summary = f"{len(report.written)} written, {len(report.skipped)} skipped, {len(report.failed)} failed"
    if report.ok:
        typer.secho(f"OK: {summary}", fg=typer.colors.GREEN)
        return
    typer.secho(f"ERR: {summary}", fg=typer.colors.RED)
    raise typer.Exit(1)


@app.command()
def render(text: Optional[str] = typer.Argument(None, help="Text to render; stdin when omitted")):
    """Render TEXT (or stdin) and print the result."""
    if text is None:
        raw = typer.get_text_stream("stdin").read()
        typer.echo(transform(raw), nl=False)
        return
    typer.echo(transform(text))


@app.command()
def rules():
    """List the tag rules in the order they are applied."""
    table = Table(box=box.ASCII, title="Tag rules")
    table.add_column("#", justify="right")
    table.add_column("Rule", no_wrap=True)
    table.add_column("Pattern", overflow="fold")
    for i, rule in enumerate(RULE_TABLE, 1):
        table.add_row(str(i), rule.name, rule.pattern.pattern)
    Console().print(table)


__all__ = ["app"]
