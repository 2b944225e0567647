"""Command-line interface for jilb-insight"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .api import analyze_file
from .config import load_config
from .exceptions import FileAccessError, JilbInsightError
from .formatters import get_formatter
from .logging_config import setup_logging
from .scanning.tokenizer import tokenize

app = typer.Typer(
    name="jilb-insight",
    help="jilb-insight - Jilb complexity metric for F# source",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"jilb-insight {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Jilb metric: absolute/relative complexity and nesting depth."""


@app.command()
def analyze(
    path: Path = typer.Argument(
        ...,
        help="F# source file to analyze",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    variant: Optional[str] = typer.Option(
        None,
        "--variant",
        "-m",
        help="Relative complexity denominator: statement_ratio or operator_ratio",
    ),
    profile: Optional[str] = typer.Option(
        None,
        "--profile",
        "-p",
        help="Weight profile: reference or legacy",
    ),
    else_frame: Optional[bool] = typer.Option(
        None,
        "--else-frame/--no-else-frame",
        help="Whether 'else' opens a nesting level",
    ),
    marker: Optional[str] = typer.Option(
        None,
        "--marker",
        help="Case-arm marker lexeme",
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich or json",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a jilb-insight.toml file",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
) -> None:
    """
    Compute the Jilb metric of an F# file.

    [bold cyan]Examples:[/bold cyan]

      jilb-insight analyze Program.fs

      jilb-insight analyze Program.fs --variant operator_ratio --format json

      jilb-insight analyze Program.fs --profile legacy --else-frame
    """
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        formatter = get_formatter(output_format)
        settings = load_config(
            config_file=config,
            metric_variant=variant,
            weight_profile=profile,
            else_opens_frame=else_frame,
            case_arm_marker=marker,
        )
        metric = analyze_file(path, settings)
    except JilbInsightError as e:
        if output_format == "json":
            print(json.dumps(e.to_dict(), indent=2, sort_keys=True))
        else:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    formatter.render(metric, str(path))


@app.command()
def tokens(
    path: Path = typer.Argument(
        ...,
        help="F# source file to tokenize",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    as_json: bool = typer.Option(False, "--json", help="Print tokens as JSON"),
) -> None:
    """Print the token stream the operator table is built from."""
    try:
        source = path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        error = FileAccessError(path, str(e))
        console.print(f"[red]Error:[/red] {escape(str(error))}")
        raise typer.Exit(1)

    stream = tokenize(source)

    if as_json:
        print(json.dumps([{"text": t.text, "kind": t.kind} for t in stream], indent=2))
        return

    table = Table(title=f"Tokens of {escape(str(path))}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Text")
    for index, token in enumerate(stream, start=1):
        table.add_row(str(index), token.kind, escape(token.text))
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
