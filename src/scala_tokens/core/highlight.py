from pathlib import Path

from scala_tokens.core.classifier import classify_tree
from scala_tokens.core.encoding import sort_tokens
from scala_tokens.core.languages import resolve_language
from scala_tokens.core.parser import parse_source
from scala_tokens.models import SemanticToken


def highlight_source(text: str, sort: bool = False) -> list[SemanticToken]:
    """Parse *text* and classify it. Parse failures propagate as ``ParseError``."""
    tokens = classify_tree(text, parse_source(text))
    return sort_tokens(tokens) if sort else tokens


def run_highlight(
    path: str | None = None,
    code: str | None = None,
    language: str | None = None,
    sort: bool = False,
) -> tuple[str, list[SemanticToken], str]:
    """Highlight a file or code snippet.

    Returns (source_text, tokens, resolved_language).
    """
    file_path = Path(path) if path and code is None else None
    resolved_language = resolve_language(language, file_path)

    if code is not None:
        text = code
    elif file_path is not None:
        try:
            text = file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {path}") from None
    else:
        raise ValueError("Either a path or code must be provided.")

    return text, highlight_source(text, sort=sort), resolved_language
