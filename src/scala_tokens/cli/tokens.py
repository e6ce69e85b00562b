import json
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from scala_tokens.core.encoding import LEGEND, encode_tokens
from scala_tokens.core.highlight import run_highlight
from scala_tokens.core.legend import encode_category, encode_modifiers
from scala_tokens.core.positions import LineTable
from scala_tokens.models import SemanticToken

console = Console()

_FORMATS = ("table", "json", "encoded")


def _render_table(text: str, token_list: list[SemanticToken]) -> None:
    lines = LineTable.build(text)
    table = Table(show_lines=False)
    for header in ("line", "column", "length", "category", "modifiers", "text"):
        table.add_column(header)
    for token in token_list:
        start = lines.offset_of(token.line, token.column)
        table.add_row(
            str(token.line),
            str(token.column),
            str(token.length),
            token.category,
            ", ".join(token.model_dump()["modifiers"]),
            text[start : start + token.length],
        )
    console.print(table)
    console.print(f"({len(token_list)} tokens)")


def tokens(
    path: Annotated[str | None, typer.Argument(help="Path to a Scala source file.")] = None,
    code: Annotated[str | None, typer.Option(help="Scala source string to highlight instead of a file path.")] = None,
    language: Annotated[str | None, typer.Option(help="Language name or alias (scala, sc, sbt).")] = None,
    output: Annotated[str, typer.Option("--format", "-f", help="Output format: table, json or encoded.")] = "table",
    sort: Annotated[
        bool,
        typer.Option("--sort/--no-sort", envvar="SCALA_TOKENS_SORT", help="Order tokens by position."),
    ] = False,
) -> None:
    """Print the semantic tokens of a Scala file or snippet."""
    if output not in _FORMATS:
        console.print(f"[red]Error:[/red] unknown format '{output}'. Choose one of: {', '.join(_FORMATS)}")
        raise typer.Exit(code=2)
    if path is None and code is None:
        console.print("[red]Error:[/red] provide a PATH or --code.")
        raise typer.Exit(code=2)

    try:
        text, token_list, _ = run_highlight(path=path, code=code, language=language, sort=sort)
    except (ValueError, FileNotFoundError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from None

    if output == "json":
        typer.echo(json.dumps([token.model_dump(mode="json") for token in token_list]))
    elif output == "encoded":
        typer.echo(encode_tokens(token_list, text).model_dump_json())
    else:
        _render_table(text, token_list)


def legend() -> None:
    """Show the token categories and modifiers with their wire encodings."""
    categories = Table(title="categories")
    categories.add_column("index")
    categories.add_column("category")
    for name in LEGEND.token_types:
        categories.add_row(str(encode_category(name)), name)
    console.print(categories)

    modifiers = Table(title="modifiers")
    modifiers.add_column("bit")
    modifiers.add_column("modifier")
    for name in LEGEND.token_modifiers:
        modifiers.add_row(str(encode_modifiers([name])), name)
    console.print(modifiers)
