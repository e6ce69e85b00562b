"""FastMCP server exposing scala-tokens tools."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from scala_tokens.config import get_default_sort
from scala_tokens.core.encoding import LEGEND, encode_tokens
from scala_tokens.core.highlight import run_highlight


def create_mcp_server() -> FastMCP:
    """Create a FastMCP server with the highlighting tools."""

    mcp = FastMCP("scala-tokens", instructions="Semantic highlighting tokens for Scala sources.")

    @mcp.tool()
    def semantic_tokens(
        code: str | None = None,
        path: str | None = None,
        language: str | None = None,
        sort: bool | None = None,
    ) -> list[dict[str, Any]] | str:
        """Classify Scala code or a file into semantic tokens."""
        if path is None and code is None:
            return "Error: either 'path' or 'code' must be provided."
        try:
            _, tokens, _ = run_highlight(
                path=path,
                code=code,
                language=language,
                sort=get_default_sort() if sort is None else sort,
            )
        except (ValueError, FileNotFoundError) as exc:
            return f"Error: {exc}"
        return [token.model_dump(mode="json") for token in tokens]

    @mcp.tool()
    def encoded_tokens(code: str | None = None, path: str | None = None, language: str | None = None) -> list[int] | str:
        """Classify Scala code and return the relative integer token encoding."""
        if path is None and code is None:
            return "Error: either 'path' or 'code' must be provided."
        try:
            text, tokens, _ = run_highlight(path=path, code=code, language=language)
        except (ValueError, FileNotFoundError) as exc:
            return f"Error: {exc}"
        return encode_tokens(tokens, text).data

    @mcp.tool()
    def legend() -> dict[str, list[str]]:
        """Return the token categories and modifiers, in wire order."""
        return LEGEND.model_dump()

    return mcp
