"""Lowered JavaScript syntax tree.

The parser front-end turns tree-sitter nodes into the small set of variants
below. Only the kinds the import rule inspects get their own class; everything
else becomes an ``OpaqueNode`` that keeps its grammar kind and named children.

Traversal is driven by ``NODE_SCHEMA``: for every kind, the ordered child
fields and whether each holds one node or a sequence of nodes.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple

from .config import FUNCTION_KINDS


class UnsupportedNodeError(Exception):
    """Raised when a node kind has no traversal schema."""

    def __init__(self, kind: str):
        super().__init__(f"No traversal schema for node kind '{kind}'")
        self.kind = kind


class Node:
    kind: str


@dataclass(frozen=True)
class Program(Node):
    kind: ClassVar[str] = "program"
    body: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class StringLiteral(Node):
    kind: ClassVar[str] = "string"
    value: str


@dataclass(frozen=True)
class Identifier(Node):
    kind: ClassVar[str] = "identifier"
    name: str


@dataclass(frozen=True)
class ImportOperator(Node):
    """The ``import`` callee of a dynamic ``import(...)`` expression."""
    kind: ClassVar[str] = "import"


@dataclass(frozen=True)
class ImportDeclaration(Node):
    kind: ClassVar[str] = "import_statement"
    source: Optional[Node] = None
    clause: Optional[Node] = None


@dataclass(frozen=True)
class CallExpression(Node):
    kind: ClassVar[str] = "call_expression"
    callee: Node
    arguments: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class FunctionNode(Node):
    kind: str
    name: Optional[Node] = None
    parameters: Tuple[Node, ...] = ()
    body: Optional[Node] = None


@dataclass(frozen=True)
class OpaqueNode(Node):
    kind: str
    children: Tuple[Node, ...] = ()


class Arity(Enum):
    SINGLE = "single"
    SEQUENCE = "sequence"


FieldSpec = Tuple[Tuple[str, Arity], ...]

_FUNCTION_FIELDS: FieldSpec = (
    ("name", Arity.SINGLE),
    ("parameters", Arity.SEQUENCE),
    ("body", Arity.SINGLE),
)

NODE_SCHEMA: dict[str, FieldSpec] = {
    Program.kind: (("body", Arity.SEQUENCE),),
    ImportDeclaration.kind: (("clause", Arity.SINGLE), ("source", Arity.SINGLE)),
    CallExpression.kind: (("callee", Arity.SINGLE), ("arguments", Arity.SEQUENCE)),
    StringLiteral.kind: (),
    Identifier.kind: (),
    ImportOperator.kind: (),
    **{kind: _FUNCTION_FIELDS for kind in FUNCTION_KINDS},
}

OPAQUE_FIELDS: FieldSpec = (("children", Arity.SEQUENCE),)


def fields_of(node: Node) -> FieldSpec:
    if isinstance(node, OpaqueNode):
        return OPAQUE_FIELDS
    try:
        return NODE_SCHEMA[node.kind]
    except (KeyError, AttributeError):
        raise UnsupportedNodeError(getattr(node, "kind", type(node).__name__)) from None
