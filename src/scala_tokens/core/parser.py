"""Parse Scala source with tree-sitter and convert the concrete tree into ``core.tree`` nodes.

Tree-sitter reports byte offsets; the converted nodes carry character offsets
into the decoded text, which is what the line table indexes.
"""

import logging
from collections.abc import Iterator

from tree_sitter import Node as TsNode
from tree_sitter_language_pack import get_parser

from scala_tokens.core.tree import (
    Block,
    Ctor,
    DefnClass,
    DefnDef,
    DefnObject,
    DefnTrait,
    DefnVal,
    DefnVar,
    Import,
    Importee,
    ImporteeName,
    ImporteeRename,
    ImporteeUnimport,
    ImporteeWildcard,
    Importer,
    Init,
    Lit,
    LiteralKind,
    Mod,
    Param,
    Pkg,
    Source,
    Stat,
    Template,
    Term,
    TermName,
    TermRef,
    TermSelect,
    TypeName,
    TypeRef,
    TypeSelect,
    Unknown,
)

logger = logging.getLogger(__name__)

_LITERALS: dict[str, LiteralKind] = {
    "integer_literal": "Lit.Int",
    "floating_point_literal": "Lit.Double",
    "string": "Lit.String",
    "interpolated_string_expression": "Lit.String",
    "character_literal": "Lit.Char",
    "boolean_literal": "Lit.Boolean",
    "null_literal": "Lit.Null",
    "symbol_literal": "Lit.Symbol",
}

_IDENTIFIERS = frozenset({"identifier", "operator_identifier", "type_identifier"})
_COMMENTS = frozenset({"comment", "block_comment"})
_WILDCARDS = frozenset({"wildcard", "namespace_wildcard"})
_SELECTORS = frozenset({"namespace_selectors", "import_selectors"})
_RENAMES = frozenset({"arrow_renamed_identifier", "as_renamed_identifier", "renamed_identifier"})


class ParseError(ValueError):
    """The source could not be parsed into a well-formed tree."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(message)
        self.offset = offset


def parse_source(text: str) -> Source:
    """Parse *text* as Scala. Raises ``ParseError`` if the tree contains syntax errors."""
    source_bytes = text.encode("utf-8")
    tree = get_parser("scala").parse(source_bytes)
    root = tree.root_node

    if root.has_error:
        error = _first_error(root)
        offset = error.start_byte if error is not None else root.start_byte
        logger.warning("Scala parse failed at byte %d", offset)
        raise ParseError(f"Syntax error at byte offset {offset}", offset=offset)

    source = _TreeConverter(text, source_bytes).source(root)
    logger.debug("Parsed %d top-level statements", len(source.stats))
    return source


def _first(*nodes: TsNode | None) -> TsNode | None:
    for node in nodes:
        if node is not None:
            return node
    return None


def _first_error(node: TsNode) -> TsNode | None:
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


class _TreeConverter:
    def __init__(self, text: str, source_bytes: bytes) -> None:
        self._bytes = source_bytes
        self._char_offsets: list[int] | None = None
        if len(source_bytes) != len(text):
            offsets: list[int] = []
            for index, char in enumerate(text):
                offsets.extend([index] * len(char.encode("utf-8")))
            offsets.append(len(text))
            self._char_offsets = offsets

        self._statements = {
            "package_clause": self._package,
            "import_declaration": self._import,
            "class_definition": self._class,
            "trait_definition": self._trait,
            "object_definition": self._object,
            "package_object": self._object,
            "val_definition": self._val,
            "var_definition": self._var,
            "function_definition": self._def,
        }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _start(self, node: TsNode) -> int:
        if self._char_offsets is None:
            return node.start_byte
        return self._char_offsets[node.start_byte]

    def _text(self, node: TsNode) -> str:
        return self._bytes[node.start_byte : node.end_byte].decode("utf-8")

    def _named(self, node: TsNode) -> Iterator[TsNode]:
        return (child for child in node.named_children if child.type not in _COMMENTS)

    def _child_of_type(self, node: TsNode, *types: str) -> TsNode | None:
        for child in node.children:
            if child.type in types:
                return child
        return None

    def _name_node(self, node: TsNode) -> TsNode | None:
        return _first(node.child_by_field_name("name"), self._child_of_type(node, *_IDENTIFIERS))

    def _unknown(self, node: TsNode) -> Unknown:
        return Unknown(start=self._start(node), production=node.type)

    def _term_name(self, node: TsNode) -> TermName:
        return TermName(start=self._start(node), value=self._text(node))

    def _type_name(self, node: TsNode) -> TypeName:
        return TypeName(start=self._start(node), value=self._text(node))

    def _mods(self, node: TsNode) -> list[Mod]:
        mods: list[Mod] = []
        for child in node.children:
            if child.type == "modifiers":
                for mod in child.children:
                    keyword = mod.children[0] if mod.type == "access_modifier" and mod.children else mod
                    if mod.type != "annotation":
                        mods.append(Mod(start=self._start(mod), keyword=self._text(keyword)))
            elif child.type in ("case", "val", "var") and node.type in ("class_parameter", "class_definition"):
                mods.append(Mod(start=self._start(child), keyword=child.type))
            elif child.type == "case" and node.type == "object_definition":
                mods.append(Mod(start=self._start(child), keyword="case"))
        return sorted(mods, key=lambda mod: mod.start)

    def _path_segments(self, node: TsNode) -> list[TsNode]:
        if node.type in _IDENTIFIERS:
            return [node]
        segments: list[TsNode] = []
        for child in self._named(node):
            segments.extend(self._path_segments(child))
        return segments

    def _ref_from_segments(self, segments: list[TsNode]) -> TermRef:
        ref: TermRef = self._term_name(segments[0])
        for segment in segments[1:]:
            ref = TermSelect(start=ref.start, qual=ref, name=self._term_name(segment))
        return ref

    # ------------------------------------------------------------------
    # Statements and terms
    # ------------------------------------------------------------------

    def source(self, root: TsNode) -> Source:
        return Source(stats=[self.stat(child) for child in self._named(root)])

    def stat(self, node: TsNode) -> Stat:
        convert = self._statements.get(node.type)
        if convert is not None:
            return convert(node)
        return self.term(node)

    def term(self, node: TsNode) -> Term:
        if node.type == "identifier":
            return self._term_name(node)
        if node.type in _LITERALS:
            return Lit(kind=_LITERALS[node.type], start=self._start(node), syntax=self._text(node))
        if node.type in ("stable_identifier", "field_expression"):
            return self._term_ref(node)
        if node.type in ("block", "indented_block"):
            return Block(start=self._start(node), stats=[self.stat(child) for child in self._named(node)])
        if node.type == "parenthesized_expression":
            inner = next(self._named(node), None)
            if inner is not None:
                return self.term(inner)
        return self._unknown(node)

    def _term_ref(self, node: TsNode) -> TermRef:
        if node.type == "identifier":
            return self._term_name(node)
        if node.type == "stable_identifier":
            parts = list(self._named(node))
            if len(parts) >= 2:
                return TermSelect(
                    start=self._start(node),
                    qual=self._term_ref(parts[0]),
                    name=self._term_name(parts[-1]),
                )
        if node.type == "field_expression":
            value = node.child_by_field_name("value")
            field = node.child_by_field_name("field")
            if value is not None and field is not None:
                return TermSelect(start=self._start(node), qual=self._term_ref(value), name=self._term_name(field))
        return self._unknown(node)

    def _type(self, node: TsNode) -> TypeRef:
        if node.type == "type_identifier":
            return self._type_name(node)
        if node.type in ("identifier", "stable_identifier", "field_expression"):
            return self._term_ref(node)
        if node.type == "stable_type_identifier":
            parts = list(self._named(node))
            if len(parts) >= 2:
                return TypeSelect(
                    start=self._start(node),
                    qual=self._term_ref(parts[0]),
                    name=self._type_name(parts[-1]),
                )
        if node.type in ("generic_type", "annotated_type", "projected_type"):
            base = _first(node.child_by_field_name("type"), next(self._named(node), None))
            if base is not None:
                return self._type(base)
        return self._unknown(node)

    # ------------------------------------------------------------------
    # Definitions
    # ------------------------------------------------------------------

    def _package(self, node: TsNode) -> Pkg | Unknown:
        name = _first(node.child_by_field_name("name"), self._child_of_type(node, "package_identifier"))
        if name is None:
            return self._unknown(node)
        body = self._child_of_type(node, "template_body")
        return Pkg(
            start=self._start(node),
            ref=self._ref_from_segments(self._path_segments(name)),
            stats=[self.stat(child) for child in self._named(body)] if body is not None else [],
        )

    def _import(self, node: TsNode) -> Import:
        groups: list[list[TsNode]] = [[]]
        for child in node.children:
            if child.type == ",":
                groups.append([])
            elif child.is_named and child.type not in _COMMENTS:
                groups[-1].append(child)
        importers = [self._importer(group) for group in groups if group]
        return Import(start=self._start(node), importers=importers)

    def _importer(self, parts: list[TsNode]) -> Importer:
        path: list[TsNode] = []
        importees: list[Importee] = []
        has_selector = False
        for part in parts:
            if part.type in _WILDCARDS:
                has_selector = True
                importees.append(ImporteeWildcard(start=self._start(part)))
            elif part.type in _SELECTORS:
                has_selector = True
                importees.extend(self._importee(selector) for selector in self._named(part))
            elif part.type in _RENAMES:
                has_selector = True
                importees.append(self._importee(part))
            else:
                path.extend(self._path_segments(part))

        if not has_selector and path:
            importees.append(ImporteeName(start=self._start(path[-1]), name=self._term_name(path[-1])))
            path = path[:-1]
        ref = self._ref_from_segments(path) if path else None
        start = self._start(parts[0])
        return Importer(start=start, ref=ref, importees=importees)

    def _importee(self, node: TsNode) -> Importee:
        if node.type in _WILDCARDS:
            return ImporteeWildcard(start=self._start(node))
        if node.type in _RENAMES:
            named = list(self._named(node))
            name = _first(node.child_by_field_name("name"), named[0])
            alias = _first(node.child_by_field_name("alias"), named[-1])
            if alias.type in _WILDCARDS or self._text(alias) == "_":
                return ImporteeUnimport(start=self._start(node), name=self._term_name(name))
            return ImporteeRename(start=self._start(node), name=self._term_name(name), rename=self._term_name(alias))
        return ImporteeName(start=self._start(node), name=self._term_name(node))

    def _template(self, node: TsNode) -> Template:
        inits: list[tuple[TsNode, list[list[Term]]]] = []
        extends = self._child_of_type(node, "extends_clause")
        if extends is not None:
            for child in self._named(extends):
                if child.type == "arguments":
                    if inits:
                        inits[-1][1].append([self.term(arg) for arg in self._named(child)])
                elif child.type == "compound_type":
                    inits.extend((part, []) for part in self._named(child) if part.type != "refinement")
                else:
                    inits.append((child, []))
        body = self._child_of_type(node, "template_body")
        return Template(
            start=self._start(_first(extends, body, node)),
            inits=[Init(start=self._start(tpe), tpe=self._type(tpe), argss=argss) for tpe, argss in inits],
            stats=[self.stat(child) for child in self._named(body)] if body is not None else [],
        )

    def _params(self, node: TsNode) -> list[Param]:
        params: list[Param] = []
        for child in self._named(node):
            if child.type not in ("parameter", "class_parameter"):
                continue
            name = self._name_node(child)
            if name is None:
                continue
            tpe = child.child_by_field_name("type")
            params.append(
                Param(
                    start=self._start(child),
                    mods=self._mods(child),
                    name=self._term_name(name),
                    decltpe=self._type(tpe) if tpe is not None else None,
                )
            )
        return params

    def _ctor(self, node: TsNode) -> Ctor | None:
        lists = [child for child in node.children if child.type == "class_parameters"]
        if not lists:
            return None
        return Ctor(start=self._start(lists[0]), paramss=[self._params(params) for params in lists])

    def _class(self, node: TsNode) -> DefnClass | Unknown:
        name = self._name_node(node)
        if name is None:
            return self._unknown(node)
        return DefnClass(
            start=self._start(node),
            mods=self._mods(node),
            name=self._type_name(name),
            ctor=self._ctor(node),
            templ=self._template(node),
        )

    def _trait(self, node: TsNode) -> DefnTrait | Unknown:
        name = self._name_node(node)
        if name is None:
            return self._unknown(node)
        return DefnTrait(
            start=self._start(node),
            mods=self._mods(node),
            name=self._type_name(name),
            ctor=self._ctor(node),
            templ=self._template(node),
        )

    def _object(self, node: TsNode) -> DefnObject | Unknown:
        name = self._name_node(node)
        if name is None:
            return self._unknown(node)
        return DefnObject(
            start=self._start(node),
            mods=self._mods(node),
            name=self._term_name(name),
            templ=self._template(node),
        )

    def _patterns(self, node: TsNode | None) -> list[Term]:
        if node is None:
            return []
        if node.type == "identifier":
            return [self._term_name(node)]
        if node.type in ("identifiers", "tuple_pattern"):
            pats: list[Term] = []
            for child in self._named(node):
                pats.extend(self._patterns(child))
            return pats
        return [self._unknown(node)]

    def _value_parts(self, node: TsNode, keyword: str) -> dict[str, object]:
        keyword_node = self._child_of_type(node, keyword)
        tpe = node.child_by_field_name("type")
        value = node.child_by_field_name("value")
        return {
            "start": self._start(_first(keyword_node, node)),
            "mods": self._mods(node),
            "pats": self._patterns(node.child_by_field_name("pattern")),
            "decltpe": self._type(tpe) if tpe is not None else None,
            "rhs": self.term(value) if value is not None else None,
        }

    def _val(self, node: TsNode) -> DefnVal:
        return DefnVal.model_validate(self._value_parts(node, "val"))

    def _var(self, node: TsNode) -> DefnVar:
        return DefnVar.model_validate(self._value_parts(node, "var"))

    def _def(self, node: TsNode) -> DefnDef | Unknown:
        name = self._name_node(node)
        if name is None:
            return self._unknown(node)
        keyword = self._child_of_type(node, "def")
        return_type = node.child_by_field_name("return_type")
        body = node.child_by_field_name("body")
        return DefnDef(
            start=self._start(_first(keyword, node)),
            mods=self._mods(node),
            name=self._term_name(name),
            paramss=[self._params(child) for child in node.children if child.type == "parameters"],
            decltpe=self._type(return_type) if return_type is not None else None,
            body=self.term(body) if body is not None else None,
        )
