"""Tests for the MCP server tool definitions."""

from __future__ import annotations

import inspect

from scala_tokens.mcp.server import create_mcp_server


class TestMcpServerCreation:
    def test_creates_server(self) -> None:
        server = create_mcp_server()
        assert server is not None
        assert server.name == "scala-tokens"

    def test_server_has_tools(self) -> None:
        server = create_mcp_server()
        tool_names = {t.name for t in server._tool_manager._tools.values()}
        assert tool_names == {"semantic_tokens", "encoded_tokens", "legend"}

    def test_sort_defaults_to_none(self) -> None:
        """Unset sort falls back to SCALA_TOKENS_SORT."""
        server = create_mcp_server()
        fn = server._tool_manager._tools["semantic_tokens"].fn  # type: ignore[attr-defined]
        assert inspect.signature(fn).parameters["sort"].default is None


class TestMcpTools:
    def test_semantic_tokens(self) -> None:
        fn = create_mcp_server()._tool_manager._tools["semantic_tokens"].fn  # type: ignore[attr-defined]
        assert fn(code="class Foo") == [
            {"line": 0, "column": 6, "length": 3, "category": "class", "modifiers": ["declaration"]}
        ]

    def test_semantic_tokens_requires_input(self) -> None:
        fn = create_mcp_server()._tool_manager._tools["semantic_tokens"].fn  # type: ignore[attr-defined]
        assert fn().startswith("Error:")

    def test_semantic_tokens_reports_parse_errors(self) -> None:
        fn = create_mcp_server()._tool_manager._tools["semantic_tokens"].fn  # type: ignore[attr-defined]
        assert fn(code="class {").startswith("Error:")

    def test_encoded_tokens(self) -> None:
        fn = create_mcp_server()._tool_manager._tools["encoded_tokens"].fn  # type: ignore[attr-defined]
        assert fn(code="class Foo") == [0, 6, 3, 9, 1]

    def test_legend(self) -> None:
        fn = create_mcp_server()._tool_manager._tools["legend"].fn  # type: ignore[attr-defined]
        legend = fn()
        assert legend["token_types"][9] == "class"
        assert legend["token_modifiers"][0] == "declaration"

    def test_encoded_tokens_count_utf16_units(self) -> None:
        fn = create_mcp_server()._tool_manager._tools["encoded_tokens"].fn  # type: ignore[attr-defined]
        assert fn(code='val s = "😀"; val t = 1')[10:15] == [0, 4, 4, 1, 0]
