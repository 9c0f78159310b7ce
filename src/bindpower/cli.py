"""bindpower CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from bindpower import __version__
from bindpower.config import BindpowerConfig, find_config, load_config
from bindpower.demo import EXAMPLES
from bindpower.errors import (
    ConfigError,
    Diagnostic,
    DiagnosticLabel,
    DiagnosticRenderer,
    ParseError,
    Severity,
)
from bindpower.operators import Infix, OperatorTable, ParenLike, Postfix, Prefix, default_table
from bindpower.parser import parse
from bindpower.project import scaffold
from bindpower.render import dump, render
from bindpower.source import SourceFile, parse_lines

_table_option = click.option(
    "--table", "table_path", type=click.Path(exists=True, dir_okay=False),
    default=None, help="Operator table (bindpower.toml) to parse with.",
)


def _resolve_config(table_path: str | None) -> BindpowerConfig:
    """Explicit --table, else the nearest bindpower.toml, else the default table."""
    if table_path is not None:
        path = Path(table_path)
    else:
        try:
            path = find_config()
        except FileNotFoundError:
            return BindpowerConfig()
    try:
        return load_config(path)
    except ConfigError as e:
        click.echo(f"error[{ConfigError.code}]: {e}", err=True)
        raise SystemExit(1)


def _ambiguity_warnings(table: OperatorTable) -> list[Diagnostic]:
    return [
        Diagnostic(
            severity=Severity.WARNING,
            code="W200",
            message=(
                f"{amb.role} operator '{amb.shadowed}' is shadowed by "
                f"'{amb.winner}' on {amb.token!r}"
            ),
            notes=["the first declared operator always wins"],
        )
        for amb in table.ambiguities()
    ]


@click.group()
@click.version_option(__version__, prog_name="bindpower")
@click.option("-v", "--verbose", is_flag=True, help="Log parser decisions to stderr.")
def main(verbose: bool) -> None:
    """Table-driven binding-power expression parser."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


@main.command(name="parse")
@click.argument("expressions", nargs=-1, required=True)
@_table_option
@click.option("--tree", is_flag=True, help="Print an indented tree.")
@click.option("--echo", is_flag=True, help="Print each input before its result.")
def parse_cmd(expressions: tuple[str, ...], table_path: str | None,
              tree: bool, echo: bool) -> None:
    """Parse EXPRESSIONS and print their canonical form."""
    config = _resolve_config(table_path)
    renderer = DiagnosticRenderer(color=config.output.color)
    as_tree = tree or config.output.tree
    had_errors = False

    for text in expressions:
        if echo:
            click.echo(text)
        try:
            expr = parse(text, config.table)
        except ParseError as e:
            had_errors = True
            click.echo(renderer.render(e.diagnostic, text), err=True)
            continue
        click.echo(dump(expr) if as_tree else render(expr))

    if had_errors:
        raise SystemExit(1)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@_table_option
def check(file: str, table_path: str | None) -> None:
    """Parse every line of an expression file and report errors."""
    config = _resolve_config(table_path)
    renderer = DiagnosticRenderer(color=config.output.color)

    for diag in _ambiguity_warnings(config.table):
        click.echo(renderer.render(diag), err=True)

    src = SourceFile(Path(file))
    results = parse_lines(src.content, config.table)
    failed = [r for r in results if not r.ok]

    for result in failed:
        assert result.error is not None
        diag = result.error.diagnostic
        shifted = Diagnostic(
            severity=diag.severity,
            code=diag.code,
            message=diag.message,
            labels=[
                DiagnosticLabel(label.offset + result.source.column, label.message)
                for label in diag.labels
            ],
            notes=diag.notes,
        )
        click.echo(
            renderer.render(shifted, src.line_at(result.source.line), file, result.source.line),
            err=True,
        )

    if failed:
        click.echo(f"checked {file}: {len(failed)} of {len(results)} expressions failed", err=True)
        raise SystemExit(1)
    click.echo(f"checked {file}: {len(results)} expressions ok")


def _describe_kind(kind: object) -> str:
    if isinstance(kind, Prefix):
        return f"prefix      right_bp={kind.right_bp}"
    if isinstance(kind, ParenLike):
        return "paren"
    if isinstance(kind, Postfix):
        return f"postfix     left_bp={kind.left_bp}"
    if isinstance(kind, Infix):
        return f"infix       left_bp={kind.left_bp} right_bp={kind.right_bp}"
    return repr(kind)


@main.command()
@_table_option
def table(table_path: str | None) -> None:
    """Show the effective operator table."""
    config = _resolve_config(table_path)
    shadowed = {(a.role, a.shadowed, a.token) for a in config.table.ambiguities()}

    for role, ops in (("leading", config.table.leading), ("following", config.table.following)):
        click.echo(f"{role}:")
        for op in ops:
            mark = "  (shadowed)" if (role, op.name, op.entry) in shadowed else ""
            symbols = " ".join(op.symbols)
            click.echo(f"  {op.name:<14} {symbols:<8} {_describe_kind(op.kind)}{mark}")


@main.command()
def demo() -> None:
    """Parse the sample inputs with the default table."""
    sample = default_table()
    for text, _expected in EXAMPLES:
        click.echo(text)
        click.echo(render(parse(text, sample)))


@main.command()
@click.argument("directory", default=".", type=click.Path(file_okay=False))
def init(directory: str) -> None:
    """Write a bindpower.toml with the default table."""
    try:
        path = scaffold(Path(directory))
    except FileExistsError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"created {path}")


@main.command()
def lsp() -> None:
    """Start the bindpower language server."""
    from bindpower.lsp import main as lsp_main

    lsp_main()
