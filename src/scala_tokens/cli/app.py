import logging
from typing import Annotated

import typer

from scala_tokens.cli.serve import serve_app
from scala_tokens.cli.tokens import legend, tokens
from scala_tokens.config import get_log_level

app = typer.Typer(
    name="scala-tokens",
    help="Scala Tokens CLI — semantic highlighting tokens for Scala sources.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("tokens")(tokens)
app.command("legend")(legend)
app.add_typer(serve_app, name="serve")


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr.")] = False,
) -> None:
    """Scala Tokens CLI — semantic highlighting tokens for Scala sources."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    app()
