"""Transport encoding for token streams.

Classification yields tokens in traversal order, positioned in Python characters.
LSP clients count columns in UTF-16 code units and most of them cannot place a
token that crosses a line break, so ``transport_tokens`` re-expresses a stream
for them. Relative encodings only make sense over position-ordered tokens, so
``encode_tokens`` always sorts first; ``sort_tokens`` is also offered on its own
for callers that want ordered output.
"""

import re
from collections.abc import Iterable

from scala_tokens.core.legend import TOKEN_CATEGORIES, TOKEN_MODIFIERS, encode_category, encode_modifiers
from scala_tokens.core.positions import LineTable
from scala_tokens.models import EncodedTokens, SemanticToken, TokenLegend

LEGEND = TokenLegend(token_types=list(TOKEN_CATEGORIES), token_modifiers=list(TOKEN_MODIFIERS))

_LINE_TERMINATOR = re.compile(r"\r\n|\r|\n")


def _utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def sort_tokens(tokens: Iterable[SemanticToken]) -> list[SemanticToken]:
    """Order tokens by (line, column); ties keep their traversal order."""
    return sorted(tokens, key=lambda token: (token.line, token.column))


def transport_tokens(text: str, tokens: Iterable[SemanticToken]) -> list[SemanticToken]:
    """Split multi-line tokens into one token per line and measure them in UTF-16 code units.

    *text* must be the document the tokens were classified from. Line
    terminators inside a token are dropped, as are the empty pieces they leave.
    """
    lines = LineTable.build(text)
    result: list[SemanticToken] = []
    for token in tokens:
        start = lines.offset_of(token.line, token.column)
        column = _utf16_len(text[lines.offset_of(token.line, 0) : start])
        pieces = _LINE_TERMINATOR.split(text[start : start + token.length])
        for index, piece in enumerate(pieces):
            if not piece:
                continue
            result.append(
                token.model_copy(
                    update={
                        "line": token.line + index,
                        "column": column if index == 0 else 0,
                        "length": _utf16_len(piece),
                    }
                )
            )
    return result


def delta_encode(tokens: Iterable[SemanticToken]) -> list[int]:
    """Encode already-ordered tokens as ``[deltaLine, deltaStart, length, type, modifiers]`` quintuples."""
    data: list[int] = []
    previous_line = 0
    previous_column = 0
    for token in tokens:
        delta_line = token.line - previous_line
        delta_column = token.column - previous_column if delta_line == 0 else token.column
        data.extend(
            [
                delta_line,
                delta_column,
                token.length,
                encode_category(token.category),
                encode_modifiers(token.modifiers),
            ]
        )
        previous_line, previous_column = token.line, token.column
    return data


def encode_tokens(tokens: Iterable[SemanticToken], text: str | None = None) -> EncodedTokens:
    """Sort and delta-encode *tokens*.

    With the source *text*, tokens are first passed through ``transport_tokens``.
    """
    if text is not None:
        tokens = transport_tokens(text, tokens)
    return EncodedTokens(data=delta_encode(sort_tokens(tokens)))
