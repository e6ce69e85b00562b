"""Closed node model consumed by the classifier.

Every node records a ``kind`` tag and the absolute character offset where it
starts. Definitions introduced by a keyword (``val``, ``def``, ``import``,
``package``) start at that keyword; their modifiers are separate ``Mod`` nodes
with their own offsets. Productions without a dedicated model become
``Unknown`` and are never classified.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LiteralKind = Literal[
    "Lit.Int",
    "Lit.Double",
    "Lit.String",
    "Lit.Char",
    "Lit.Boolean",
    "Lit.Null",
    "Lit.Symbol",
]


class Node(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str
    start: int = Field(ge=0)


class Unknown(Node):
    kind: Literal["Unknown"] = "Unknown"
    production: str = ""


class Mod(Node):
    """A modifier keyword such as ``sealed``, ``case`` or a parameter's ``val``."""

    kind: Literal["Mod"] = "Mod"
    keyword: str


class TermName(Node):
    kind: Literal["Term.Name"] = "Term.Name"
    value: str


class TypeName(Node):
    kind: Literal["Type.Name"] = "Type.Name"
    value: str


class TermSelect(Node):
    kind: Literal["Term.Select"] = "Term.Select"
    qual: TermRef
    name: TermName


class TypeSelect(Node):
    kind: Literal["Type.Select"] = "Type.Select"
    qual: TermRef
    name: TypeName


class Lit(Node):
    """A literal; ``syntax`` is its surface text, quotes included."""

    kind: LiteralKind
    syntax: str


class Block(Node):
    kind: Literal["Term.Block"] = "Term.Block"
    stats: list[Stat] = []


class Param(Node):
    kind: Literal["Term.Param"] = "Term.Param"
    mods: list[Mod] = []
    name: TermName
    decltpe: TypeRef | None = None


class Ctor(Node):
    kind: Literal["Ctor.Primary"] = "Ctor.Primary"
    paramss: list[list[Param]] = []


class Init(Node):
    """A parent type in an ``extends`` clause with its constructor argument lists."""

    kind: Literal["Init"] = "Init"
    tpe: TypeRef
    argss: list[list[Term]] = []


class Template(Node):
    kind: Literal["Template"] = "Template"
    inits: list[Init] = []
    stats: list[Stat] = []


class DefnClass(Node):
    kind: Literal["Defn.Class"] = "Defn.Class"
    mods: list[Mod] = []
    name: TypeName
    ctor: Ctor | None = None
    templ: Template | None = None


class DefnTrait(Node):
    kind: Literal["Defn.Trait"] = "Defn.Trait"
    mods: list[Mod] = []
    name: TypeName
    ctor: Ctor | None = None
    templ: Template | None = None


class DefnObject(Node):
    kind: Literal["Defn.Object"] = "Defn.Object"
    mods: list[Mod] = []
    name: TermName
    templ: Template | None = None


class DefnVal(Node):
    kind: Literal["Defn.Val"] = "Defn.Val"
    mods: list[Mod] = []
    pats: list[Term] = []
    decltpe: TypeRef | None = None
    rhs: Term | None = None


class DefnVar(Node):
    kind: Literal["Defn.Var"] = "Defn.Var"
    mods: list[Mod] = []
    pats: list[Term] = []
    decltpe: TypeRef | None = None
    rhs: Term | None = None


class DefnDef(Node):
    kind: Literal["Defn.Def"] = "Defn.Def"
    mods: list[Mod] = []
    name: TermName
    paramss: list[list[Param]] = []
    decltpe: TypeRef | None = None
    body: Term | None = None


class ImporteeName(Node):
    kind: Literal["Importee.Name"] = "Importee.Name"
    name: TermName


class ImporteeRename(Node):
    kind: Literal["Importee.Rename"] = "Importee.Rename"
    name: TermName
    rename: TermName


class ImporteeUnimport(Node):
    kind: Literal["Importee.Unimport"] = "Importee.Unimport"
    name: TermName


class ImporteeWildcard(Node):
    kind: Literal["Importee.Wildcard"] = "Importee.Wildcard"


class Importer(Node):
    kind: Literal["Importer"] = "Importer"
    ref: TermRef | None = None
    importees: list[Importee] = []


class Import(Node):
    kind: Literal["Import"] = "Import"
    importers: list[Importer] = []


class Pkg(Node):
    kind: Literal["Pkg"] = "Pkg"
    ref: TermRef
    stats: list[Stat] = []


class Source(Node):
    kind: Literal["Source"] = "Source"
    start: int = 0
    stats: list[Stat] = []


TermRef = TermName | TermSelect | Unknown
TypeRef = TypeName | TypeSelect | TermName | TermSelect | Unknown
Term = TermName | TermSelect | Lit | Block | Unknown
Importee = ImporteeName | ImporteeRename | ImporteeUnimport | ImporteeWildcard
Stat = DefnClass | DefnTrait | DefnObject | DefnVal | DefnVar | DefnDef | Import | Pkg | Term

for _model in (
    TermSelect,
    TypeSelect,
    Block,
    Param,
    Ctor,
    Init,
    Template,
    DefnClass,
    DefnTrait,
    DefnObject,
    DefnVal,
    DefnVar,
    DefnDef,
    Importer,
    Import,
    Pkg,
    Source,
):
    _model.model_rebuild()
