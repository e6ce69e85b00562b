"""Node classifier: walks a syntax tree and emits semantic tokens in pre-order.

A construct's own keywords, modifiers and name are emitted before anything
nested inside it. Node kinds without a rule are skipped without error, so a
construct outside the covered grammar only loses its own highlighting.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from scala_tokens.core.collector import TokenCollector
from scala_tokens.core.legend import TokenCategory, TokenModifier
from scala_tokens.core.positions import LineTable
from scala_tokens.core.tree import (
    Block,
    DefnClass,
    DefnDef,
    DefnObject,
    DefnTrait,
    DefnVal,
    DefnVar,
    Import,
    ImporteeRename,
    ImporteeWildcard,
    Importer,
    Lit,
    Mod,
    Node,
    Param,
    Pkg,
    Source,
    Template,
    TermName,
    TermSelect,
    TypeName,
    TypeSelect,
)
from scala_tokens.models import SemanticToken

logger = logging.getLogger(__name__)

_LITERAL_CATEGORIES: dict[str, TokenCategory] = {
    "Lit.Int": "number",
    "Lit.Double": "number",
    "Lit.String": "string",
    "Lit.Char": "string",
    "Lit.Symbol": "string",
    "Lit.Boolean": "keyword",
    "Lit.Null": "keyword",
}

_MODIFIER_KEYWORDS = frozenset(
    {
        "sealed",
        "abstract",
        "case",
        "final",
        "implicit",
        "lazy",
        "override",
        "private",
        "protected",
        "open",
        "inline",
        "opaque",
        "transparent",
        "infix",
        "val",
        "var",
    }
)


class NodeClassifier:
    def __init__(self, line_table: LineTable, collector: TokenCollector) -> None:
        self._lines = line_table
        self._collector = collector
        self._rules: dict[str, Callable[[Any], None]] = {
            "Source": self._classify_source,
            "Defn.Class": self._classify_class,
            "Defn.Trait": self._classify_trait,
            "Defn.Object": self._classify_object,
            "Import": self._classify_import,
            "Pkg": self._classify_package,
            "Template": self._classify_template,
            "Defn.Val": self._classify_val,
            "Defn.Var": self._classify_var,
            "Defn.Def": self._classify_def,
            "Term.Param": self._classify_param,
            "Term.Name": self._classify_term_name,
            "Term.Select": self._classify_term_select,
            "Term.Block": self._classify_block,
        }
        for literal_kind in _LITERAL_CATEGORIES:
            self._rules[literal_kind] = self._classify_literal

    def classify(self, node: Node) -> None:
        rule = self._rules.get(node.kind)
        if rule is None:
            logger.debug("No rule for %s at offset %d, skipping", node.kind, node.start)
            return
        rule(node)

    def classify_type(self, node: Node | None, category: TokenCategory) -> None:
        """Classify a (possibly qualified) type or path reference as *category*.

        Selections visit their selected name before their qualifier.
        """
        if isinstance(node, (TypeSelect, TermSelect)):
            self.classify_type(node.name, category)
            self.classify_type(node.qual, category)
        elif isinstance(node, (TypeName, TermName)):
            self._emit(node.start, node.value, category)

    def _emit(
        self,
        start: int,
        text: str,
        category: TokenCategory,
        modifiers: Iterable[TokenModifier] = (),
    ) -> None:
        if not text:
            return
        line, column = self._lines.locate(start)
        self._collector.append(
            SemanticToken(
                line=line,
                column=column,
                length=len(text),
                category=category,
                modifiers=frozenset(modifiers),
            )
        )

    def _emit_mods(self, mods: list[Mod]) -> None:
        for mod in mods:
            if mod.keyword in _MODIFIER_KEYWORDS:
                self._emit(mod.start, mod.keyword, "keyword")

    def _classify_source(self, node: Source) -> None:
        for stat in node.stats:
            self.classify(stat)

    def _classify_class(self, node: DefnClass) -> None:
        self._emit_mods(node.mods)
        self._emit(node.name.start, node.name.value, "class", ("declaration",))
        self._classify_definition_body(node.templ, node.ctor.paramss if node.ctor else [])

    def _classify_trait(self, node: DefnTrait) -> None:
        self._emit_mods(node.mods)
        self._emit(node.name.start, node.name.value, "interface", ("declaration", "abstract"))
        self._classify_definition_body(node.templ, node.ctor.paramss if node.ctor else [])

    def _classify_object(self, node: DefnObject) -> None:
        self._emit_mods(node.mods)
        self._emit(node.name.start, node.name.value, "class", ("declaration",))
        self._classify_definition_body(node.templ, [])

    def _classify_definition_body(self, templ: Template | None, paramss: list[list[Param]]) -> None:
        if templ is not None:
            self._classify_template(templ)
        for params in paramss:
            for param in params:
                self._classify_param(param)
        if templ is not None:
            for stat in templ.stats:
                self.classify(stat)

    def _classify_template(self, node: Template) -> None:
        for init in node.inits:
            self.classify_type(init.tpe, "interface")
            for args in init.argss:
                for arg in args:
                    if isinstance(arg, Lit) and arg.kind == "Lit.String":
                        self._emit(arg.start, arg.syntax, "string")

    def _classify_import(self, node: Import) -> None:
        self._emit(node.start, "import", "keyword")
        for importer in node.importers:
            self._classify_importer(importer)

    def _classify_importer(self, node: Importer) -> None:
        for importee in node.importees:
            if isinstance(importee, ImporteeWildcard):
                continue
            self._emit(importee.name.start, importee.name.value, "interface")
            if isinstance(importee, ImporteeRename):
                self._emit(importee.rename.start, importee.rename.value, "interface")
        self.classify_type(node.ref, "namespace")

    def _classify_package(self, node: Pkg) -> None:
        self._emit(node.start, "package", "keyword")
        self.classify_type(node.ref, "namespace")
        for stat in node.stats:
            self.classify(stat)

    def _classify_val(self, node: DefnVal) -> None:
        self._classify_value(node, "val")

    def _classify_var(self, node: DefnVar) -> None:
        self._classify_value(node, "var")

    def _classify_value(self, node: DefnVal | DefnVar, keyword: str) -> None:
        self._emit_mods(node.mods)
        self._emit(node.start, keyword, "keyword")
        for pat in node.pats:
            self.classify(pat)
        self.classify_type(node.decltpe, "interface")
        if node.rhs is not None:
            self.classify(node.rhs)

    def _classify_def(self, node: DefnDef) -> None:
        self._emit_mods(node.mods)
        self._emit(node.start, "def", "keyword")
        self._emit(node.name.start, node.name.value, "method", ("declaration",))
        for params in node.paramss:
            for param in params:
                self._classify_param(param)
        self.classify_type(node.decltpe, "interface")
        if node.body is not None:
            self.classify(node.body)

    def _classify_param(self, node: Param) -> None:
        self._emit_mods(node.mods)
        self._emit(node.name.start, node.name.value, "parameter")
        self.classify_type(node.decltpe, "interface")

    def _classify_literal(self, node: Lit) -> None:
        self._emit(node.start, node.syntax, _LITERAL_CATEGORIES[node.kind])

    def _classify_term_name(self, node: TermName) -> None:
        self._emit(node.start, node.value, "variable")

    def _classify_term_select(self, node: Node) -> None:
        self.classify_type(node, "variable")

    def _classify_block(self, node: Block) -> None:
        for stat in node.stats:
            self.classify(stat)


def classify_tree(text: str, tree: Node) -> list[SemanticToken]:
    """Classify *tree*, parsed from *text*, into tokens in traversal order.

    Builds a fresh line table and collector per call; nothing is shared between calls.
    """
    collector = TokenCollector()
    classifier = NodeClassifier(LineTable.build(text), collector)
    classifier.classify(tree)
    logger.debug("Classified %d tokens", len(collector))
    return collector.finish()
