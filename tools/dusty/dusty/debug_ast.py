from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .parsing import parse_javascript
from .syntax import (
    Arity, CallExpression, FunctionNode, Identifier, Node, StringLiteral, fields_of,
)
from .walker import ScopeTracker


@dataclass
class DumpOpts:
    max_nodes: int = 10000
    indent: str = "  "
    show_depth: bool = True
    text_limit: int = 60


def _label(n: Node, limit: int) -> str:
    if isinstance(n, StringLiteral):
        s = n.value if len(n.value) <= limit else n.value[:limit] + "…"
        return f'{n.kind} "{s}"'
    if isinstance(n, Identifier):
        return f"{n.kind} {n.name}"
    if isinstance(n, CallExpression):
        return f"{n.kind} ({len(n.arguments)} args)"
    if isinstance(n, FunctionNode):
        return f"{n.kind} (scope boundary)"
    return n.kind


def _dump_subtree_with_fields(root: Node, opts: DumpOpts) -> List[str]:
    """
    Walk the lowered tree the same way the import walker does, printing each
    node with the field it hangs from and the function depth it is seen at.
    """
    scope = ScopeTracker()
    lines: List[str] = []
    count = 0

    def emit(n: Node, level: int, field_name: Optional[str]):
        nonlocal count
        pieces = [opts.indent * level]
        if field_name:
            pieces += [f"{field_name}: "]
        pieces += [_label(n, opts.text_limit)]
        if opts.show_depth:
            pieces += [f" [depth={scope.depth}]"]
        lines.append("".join(pieces))
        count += 1

    def visit(n: Node, level: int, field_name: Optional[str]):
        if count >= opts.max_nodes:
            return
        emit(n, level, field_name)
        boundary = scope.enter_if_boundary(n)
        try:
            for name, arity in fields_of(n):
                value = getattr(n, name, None)
                if arity is Arity.SEQUENCE:
                    for child in value or ():
                        if isinstance(child, Node):
                            visit(child, level + 1, name)
                elif isinstance(value, Node):
                    visit(value, level + 1, name)
        finally:
            scope.exit(boundary)

    visit(root, 0, None)
    if count >= opts.max_nodes:
        lines.append(f"{opts.indent}… (truncated at {opts.max_nodes} nodes)")
    return lines


def syntax_tree_to_string(source: str, filename: str = "<source>", opts: Optional[DumpOpts] = None) -> str:
    if opts is None:
        opts = DumpOpts()
    tree = parse_javascript(source)
    header = [f"// file={filename}", ""]
    return "\n".join(header + _dump_subtree_with_fields(tree, opts))
