"""Unit tests for converting tree-sitter Scala trees into classifier nodes."""

import pytest
from tree_sitter import Parser

from scala_tokens.core.parser import ParseError, parse_source
from scala_tokens.core.tree import (
    DefnClass,
    DefnDef,
    DefnObject,
    DefnVal,
    Import,
    ImporteeName,
    ImporteeWildcard,
    Lit,
    Pkg,
    TermName,
    TermSelect,
    TypeName,
    Unknown,
)


def test_scala_grammar_is_available(scala_parser: Parser) -> None:
    tree = scala_parser.parse(b"class Foo")
    assert tree.root_node.type == "compilation_unit"
    assert not tree.root_node.has_error


def test_empty_source_has_no_statements() -> None:
    assert parse_source("").stats == []


class TestClasses:
    def test_class_name_offset(self) -> None:
        source = parse_source("class Foo")

        [stat] = source.stats
        assert isinstance(stat, DefnClass)
        assert stat.name == TypeName(start=6, value="Foo")
        assert stat.mods == []
        assert stat.ctor is None

    def test_modifiers_in_source_order(self) -> None:
        [stat] = parse_source("sealed abstract class Shape").stats

        assert isinstance(stat, DefnClass)
        assert [(mod.keyword, mod.start) for mod in stat.mods] == [("sealed", 0), ("abstract", 7)]

    def test_case_class_parameters(self) -> None:
        [stat] = parse_source("case class Point(x: Int, y: Int)").stats

        assert isinstance(stat, DefnClass)
        assert [mod.keyword for mod in stat.mods] == ["case"]
        assert stat.ctor is not None
        [params] = stat.ctor.paramss
        assert [param.name.value for param in params] == ["x", "y"]
        assert [param.decltpe for param in params] == [TypeName(start=20, value="Int"), TypeName(start=28, value="Int")]

    def test_object_parent(self) -> None:
        [stat] = parse_source("object Main extends App").stats

        assert isinstance(stat, DefnObject)
        assert stat.name.value == "Main"
        assert stat.templ is not None
        assert [init.tpe for init in stat.templ.inits] == [TypeName(start=20, value="App")]


class TestImports:
    def test_last_segment_is_imported_symbol(self) -> None:
        [stat] = parse_source("import scala.collection.mutable").stats

        assert isinstance(stat, Import)
        assert stat.start == 0
        [importer] = stat.importers
        assert importer.ref == TermSelect(
            start=7,
            qual=TermName(start=7, value="scala"),
            name=TermName(start=13, value="collection"),
        )
        assert importer.importees == [ImporteeName(start=24, name=TermName(start=24, value="mutable"))]

    def test_wildcard_keeps_full_path_as_reference(self) -> None:
        [stat] = parse_source("import scala.collection._").stats

        assert isinstance(stat, Import)
        [importer] = stat.importers
        assert isinstance(importer.ref, TermSelect)
        assert importer.ref.name.value == "collection"
        assert [type(importee) for importee in importer.importees] == [ImporteeWildcard]

    def test_selectors(self) -> None:
        [stat] = parse_source("import scala.collection.{Map, Set}").stats

        assert isinstance(stat, Import)
        [importer] = stat.importers
        names = [importee.name.value for importee in importer.importees if isinstance(importee, ImporteeName)]
        assert names == ["Map", "Set"]


def test_package_reference() -> None:
    [stat, *_] = parse_source("package com.example\n\nclass A\n").stats

    assert isinstance(stat, Pkg)
    assert stat.ref == TermSelect(
        start=8,
        qual=TermName(start=8, value="com"),
        name=TermName(start=12, value="example"),
    )


def test_definitions_inside_object_body() -> None:
    text = "object O {\n  val answer = 42\n  def twice(n: Int): Int = n\n}"
    [stat] = parse_source(text).stats

    assert isinstance(stat, DefnObject)
    assert stat.templ is not None
    value, function = stat.templ.stats
    assert isinstance(value, DefnVal)
    assert value.start == text.index("val")
    assert value.pats == [TermName(start=text.index("answer"), value="answer")]
    assert value.rhs == Lit(kind="Lit.Int", start=text.index("42"), syntax="42")
    assert isinstance(function, DefnDef)
    assert function.start == text.index("def")
    assert function.name.value == "twice"
    assert [[param.name.value for param in params] for params in function.paramss] == [["n"]]
    assert function.decltpe == TypeName(start=text.index("Int = n"), value="Int")
    assert function.body == TermName(start=text.rindex("n"), value="n")


def test_unmapped_expression_becomes_unknown() -> None:
    [stat] = parse_source('object O {\n  println("hi")\n}').stats

    assert isinstance(stat, DefnObject)
    assert stat.templ is not None
    [call] = stat.templ.stats
    assert isinstance(call, Unknown)
    assert call.start == 13


def test_offsets_are_in_characters_not_bytes() -> None:
    text = 'object O {\n  val café = "é"\n}'
    [stat] = parse_source(text).stats

    assert isinstance(stat, DefnObject)
    assert stat.templ is not None
    [value] = stat.templ.stats
    assert isinstance(value, DefnVal)
    assert value.pats == [TermName(start=text.index("café"), value="café")]
    assert value.rhs == Lit(kind="Lit.String", start=text.index('"é"'), syntax='"é"')


@pytest.mark.parametrize("text", ["class {", "object O {", "val = )"])
def test_syntax_errors_raise(text: str) -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_source(text)
    assert excinfo.value.offset >= 0
