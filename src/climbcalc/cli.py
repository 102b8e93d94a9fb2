"""
climbcalc CLI.

Thin command-line wrapper around the expression engine:
- eval: Evaluate an expression and print the integer result
- parse: Print the canonical form or the span-annotated tree
- tokens: List the tokens of an expression
"""

from __future__ import annotations

import logging
import platform
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from climbcalc._version import get_version
from climbcalc.core.errors import ClimbcalcError, format_diagnostic
from climbcalc.core.expression_lang import dump_expr, evaluate, parse_expression, tokenize
from climbcalc.core.expression_lang.tokenizer import GroupToken, NumberToken, OperatorToken, Token

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    help="climbcalc – integer expression calculator with source spans",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"climbcalc version {get_version()}")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log tokenizer, parser and evaluator activity to stderr",
    ),
) -> None:
    """climbcalc CLI main callback for global options."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


def _fail(source: str, error: ClimbcalcError) -> NoReturn:
    """Print a diagnostic for ``error`` and exit with status 1."""
    err_console.print(f"[red]{escape(format_diagnostic(source, error))}[/red]")
    raise typer.Exit(code=1)


@app.command(name="eval")
def eval_command(
    expression: str = typer.Argument(..., help="Expression to evaluate, e.g. '(1 + 2) * 3'"),
    max_depth: int | None = typer.Option(
        None,
        "--max-depth",
        min=1,
        help="Maximum nesting depth (default: from settings)",
    ),
) -> None:
    """Evaluate an expression and print its value."""
    try:
        result = evaluate(parse_expression(expression, max_depth=max_depth))
    except ClimbcalcError as e:
        _fail(expression, e)
    typer.echo(result)


@app.command(name="parse")
def parse_command(
    expression: str = typer.Argument(..., help="Expression to parse"),
    spans: bool = typer.Option(
        False,
        "--spans",
        help="Show the source span of every literal and operator",
    ),
    max_depth: int | None = typer.Option(
        None,
        "--max-depth",
        min=1,
        help="Maximum nesting depth (default: from settings)",
    ),
) -> None:
    """Parse an expression and print its tree."""
    try:
        expr = parse_expression(expression, max_depth=max_depth)
    except ClimbcalcError as e:
        _fail(expression, e)
    typer.echo(dump_expr(expr) if spans else str(expr))


@app.command(name="tokens")
def tokens_command(
    expression: str = typer.Argument(..., help="Expression to tokenize"),
) -> None:
    """List the tokens of an expression."""
    try:
        tokens = tokenize(expression)
    except ClimbcalcError as e:
        _fail(expression, e)

    table = Table(title="Tokens")
    table.add_column("Kind", style="cyan")
    table.add_column("Text")
    table.add_column("Line", justify="right")
    table.add_column("Column", justify="right")
    for depth, tok in _walk(tokens):
        table.add_row(
            "  " * depth + _kind(tok),
            escape(tok.span.text),
            str(tok.span.line),
            str(tok.span.column),
        )
    console.print(table)


def _walk(tokens: list[Token], depth: int = 0) -> list[tuple[int, Token]]:
    """Flatten grouped tokens, recording how deeply each one is nested."""
    rows: list[tuple[int, Token]] = []
    for tok in tokens:
        rows.append((depth, tok))
        if isinstance(tok, GroupToken):
            rows.extend(_walk(tok.inner, depth + 1))
    return rows


def _kind(tok: Token) -> str:
    if isinstance(tok, NumberToken):
        return "number"
    if isinstance(tok, OperatorToken):
        return f"operator {tok.kind.name.lower()}"
    return "group"


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
