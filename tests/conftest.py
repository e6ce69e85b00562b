"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from scala_tokens.core.positions import LineTable
from scala_tokens.models import SemanticToken

_REPO_ROOT = Path(__file__).parent.parent

TokenView = tuple[str, str, frozenset[str]]


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


def describe_tokens(text: str, tokens: list[SemanticToken]) -> list[TokenView]:
    """Map tokens back onto *text* as (covered text, category, modifiers)."""
    lines = LineTable.build(text)
    views: list[TokenView] = []
    for token in tokens:
        start = lines.offset_of(token.line, token.column)
        views.append((text[start : start + token.length], token.category, frozenset(token.modifiers)))
    return views


@pytest.fixture
def scala_parser() -> Parser:
    """Return a tree-sitter parser for Scala."""
    return get_parser("scala")


@pytest.fixture
def describe() -> Callable[[str, list[SemanticToken]], list[TokenView]]:
    return describe_tokens
