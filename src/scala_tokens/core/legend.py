"""Fixed token category and modifier vocabularies shared with highlighting clients.

Both lists are part of the wire contract: a category is transported as its index
in ``TOKEN_CATEGORIES`` and a modifier set as a bitmask over ``TOKEN_MODIFIERS``.
Their order must never change.
"""

from collections.abc import Iterable
from typing import Literal

TokenCategory = Literal[
    "comment",
    "string",
    "keyword",
    "number",
    "regexp",
    "operator",
    "namespace",
    "type",
    "struct",
    "class",
    "interface",
    "enum",
    "typeParameter",
    "function",
    "method",
    "decorator",
    "macro",
    "variable",
    "parameter",
    "property",
    "label",
    "import",
]

TokenModifier = Literal[
    "declaration",
    "documentation",
    "readonly",
    "static",
    "abstract",
    "deprecated",
    "modification",
    "async",
]

TOKEN_CATEGORIES: tuple[TokenCategory, ...] = (
    "comment",
    "string",
    "keyword",
    "number",
    "regexp",
    "operator",
    "namespace",
    "type",
    "struct",
    "class",
    "interface",
    "enum",
    "typeParameter",
    "function",
    "method",
    "decorator",
    "macro",
    "variable",
    "parameter",
    "property",
    "label",
    "import",
)

TOKEN_MODIFIERS: tuple[TokenModifier, ...] = (
    "declaration",
    "documentation",
    "readonly",
    "static",
    "abstract",
    "deprecated",
    "modification",
    "async",
)

_CATEGORY_INDEX = {name: index for index, name in enumerate(TOKEN_CATEGORIES)}
_MODIFIER_INDEX = {name: index for index, name in enumerate(TOKEN_MODIFIERS)}

# Reserved out-of-band slots for names outside the vocabularies.
UNKNOWN_CATEGORY_INDEX = len(TOKEN_CATEGORIES) + 2
UNKNOWN_MODIFIER_BIT = 1 << (len(TOKEN_MODIFIERS) + 2)


def encode_category(name: str) -> int:
    """Return the legend index of *name*, or ``UNKNOWN_CATEGORY_INDEX``."""
    return _CATEGORY_INDEX.get(name, UNKNOWN_CATEGORY_INDEX)


def encode_modifiers(names: Iterable[str]) -> int:
    """Fold modifier names into a bitmask; unknown names set ``UNKNOWN_MODIFIER_BIT``."""
    result = 0
    for name in names:
        index = _MODIFIER_INDEX.get(name)
        result |= UNKNOWN_MODIFIER_BIT if index is None else 1 << index
    return result


def modifier_sort_key(name: str) -> int:
    return _MODIFIER_INDEX.get(name, len(TOKEN_MODIFIERS))
