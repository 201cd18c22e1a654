from __future__ import annotations

from typing import Callable, FrozenSet, Protocol, TypeVar

from .config import FUNCTION_KINDS
from .syntax import Arity, Node, fields_of


class ScopeImbalanceError(RuntimeError):
    pass


class ScopeTracker:
    """Function nesting depth; 0 is module top level."""

    def __init__(self, boundary_kinds: FrozenSet[str] = FUNCTION_KINDS) -> None:
        self.boundary_kinds = boundary_kinds
        self.depth = 0

    def is_boundary(self, node: Node) -> bool:
        return node.kind in self.boundary_kinds

    def enter_if_boundary(self, node: Node) -> bool:
        if self.is_boundary(node):
            self.depth += 1
            return True
        return False

    def exit(self, was_boundary: bool) -> None:
        if not was_boundary:
            return
        if self.depth == 0:
            raise ScopeImbalanceError("exit() called at module top level")
        self.depth -= 1


class TraversalContext(Protocol):
    scope: ScopeTracker


C = TypeVar("C", bound=TraversalContext)


def walk(node: Node, on_enter: Callable[[Node, C], None], context: C) -> None:
    """
    Depth-first pre-order traversal driven by the node schema.

    ``on_enter`` sees each node at the depth of its enclosing scope; the scope
    is entered before the node's children and left after them.
    """
    on_enter(node, context)
    boundary = context.scope.enter_if_boundary(node)
    try:
        for field_name, arity in fields_of(node):
            value = getattr(node, field_name, None)
            if arity is Arity.SEQUENCE:
                for child in value or ():
                    if isinstance(child, Node):
                        walk(child, on_enter, context)
            elif isinstance(value, Node):
                walk(value, on_enter, context)
    finally:
        context.scope.exit(boundary)
