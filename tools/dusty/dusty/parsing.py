"""
Parser front-end: JavaScript source -> lowered syntax tree.

tree-sitter-javascript ships a single error-tolerant grammar, so the two
ECMAScript parse goals are layered on top of it:

  - module goal: no syntax errors and no ``return`` outside a function;
  - script goal: no syntax errors and no ``import``/``export`` declarations.

``parse_javascript`` tries the module goal first and falls back to the script
goal, the same order a Node.js loader would try for an unknown ``.js`` file.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional, Tuple

from tree_sitter import Node as TSNode

from .config import JS_NODESETS
from .syntax import (
    CallExpression, FunctionNode, Identifier, ImportDeclaration, ImportOperator,
    Node, OpaqueNode, Program, StringLiteral,
)
from .ts_utils import create_parser, line_range, node_text

log = logging.getLogger(__name__)


class ParseGoal(str, Enum):
    MODULE = "module"
    SCRIPT = "script"


class JSParseError(Exception):
    def __init__(self, message: str, goal: Optional[ParseGoal] = None):
        super().__init__(message)
        self.goal = goal


def _first_error(root: TSNode) -> Optional[TSNode]:
    stack: List[TSNode] = [root]
    while stack:
        n = stack.pop()
        if n.type == "ERROR" or n.is_missing:
            return n
        if n.has_error:
            stack.extend(reversed(n.children))
    return None


def _inside_function(n: TSNode) -> bool:
    boundaries = JS_NODESETS["function"] | JS_NODESETS["method"]
    p = n.parent
    while p is not None:
        if p.type in boundaries:
            return True
        p = p.parent
    return False


def _goal_violation(root: TSNode, goal: ParseGoal) -> Optional[TSNode]:
    """Find the first node that the given parse goal does not allow."""
    if goal is ParseGoal.MODULE:
        banned = JS_NODESETS["return"]
    else:
        banned = JS_NODESETS["import"] | JS_NODESETS["export"]
    stack: List[TSNode] = [root]
    while stack:
        n = stack.pop()
        if n.type in banned:
            if goal is ParseGoal.SCRIPT or not _inside_function(n):
                return n
        stack.extend(reversed(n.named_children))
    return None


# --- Lowering ---------------------------------------------------------------
#
# Lowering is iterative: every tree-sitter node is planned into the list of
# children it needs plus a builder that assembles the lowered node once those
# children are finished. Deeply nested expressions therefore never touch the
# interpreter recursion limit.

Build = Callable[[Tuple[Node, ...]], Node]
Plan = Tuple[List[TSNode], Build]

_SINGLE_ESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v"}


def _decode_escape(raw: str) -> str:
    body = raw[1:]
    try:
        if body.startswith("u{"):
            return chr(int(body[2:-1], 16))
        if body[0] in "xu" and len(body) > 1:
            return chr(int(body[1:], 16))
    except ValueError:
        return raw
    if body[0] in "\r\n\u2028\u2029":
        # line continuation
        return ""
    if all(c in "01234567" for c in body):
        return chr(int(body, 8))
    return _SINGLE_ESCAPES.get(body, body)


def _string_value(n: TSNode, src: bytes) -> str:
    """Cooked value of a string literal: the text between the quotes with escapes decoded."""
    parts: List[str] = []
    pos = n.start_byte + 1
    for c in n.named_children:
        if c.type != "escape_sequence":
            continue
        parts.append(src[pos:c.start_byte].decode("utf-8", errors="replace"))
        parts.append(_decode_escape(node_text(c, src)))
        pos = c.end_byte
    parts.append(src[pos:n.end_byte - 1].decode("utf-8", errors="replace"))
    return "".join(parts)


def _named(n: TSNode) -> List[TSNode]:
    return [c for c in n.named_children if c.type not in JS_NODESETS["skip"]]


def _leaf(node: Node) -> Plan:
    return [], lambda xs: node


def _plan_opaque(n: TSNode) -> Plan:
    kind = n.type
    return _named(n), lambda xs: OpaqueNode(kind=kind, children=xs)


def _plan_import(n: TSNode) -> Plan:
    source = n.child_by_field_name("source")
    clause = next((c for c in n.named_children if c.type == "import_clause"), None)
    inputs = [c for c in (source, clause) if c is not None]

    def build(xs: Tuple[Node, ...]) -> Node:
        return ImportDeclaration(
            source=xs[0] if source is not None else None,
            clause=xs[-1] if clause is not None else None,
        )
    return inputs, build


def _plan_call(n: TSNode) -> Plan:
    fn = n.child_by_field_name("function")
    args = n.child_by_field_name("arguments")
    if fn is None:
        return _plan_opaque(n)
    if args is None:
        arg_nodes: List[TSNode] = []
    elif args.type == "arguments":
        arg_nodes = _named(args)
    else:
        # tagged template: tag`...`
        arg_nodes = [args]
    return [fn] + arg_nodes, lambda xs: CallExpression(callee=xs[0], arguments=xs[1:])


def _plan_function(n: TSNode) -> Plan:
    kind = n.type
    name = n.child_by_field_name("name")
    params = n.child_by_field_name("parameters")
    single_param = n.child_by_field_name("parameter")
    body = n.child_by_field_name("body")
    head = [name] if name is not None else []
    if params is not None:
        plist = _named(params)
    elif single_param is not None:
        plist = [single_param]
    else:
        plist = []
    tail = [body] if body is not None else []

    def build(xs: Tuple[Node, ...]) -> Node:
        i = len(head)
        j = i + len(plist)
        return FunctionNode(
            kind=kind,
            name=xs[0] if head else None,
            parameters=xs[i:j],
            body=xs[j] if tail else None,
        )
    return head + plist + tail, build


def _plan_method(n: TSNode) -> Plan:
    # Key and decorators are evaluated with the class; only the value is a function.
    params = n.child_by_field_name("parameters")
    body = n.child_by_field_name("body")
    value_spans = {(c.start_byte, c.end_byte) for c in (params, body) if c is not None}
    key = [c for c in _named(n) if (c.start_byte, c.end_byte) not in value_spans]
    plist = _named(params) if params is not None else []
    tail = [body] if body is not None else []

    def build(xs: Tuple[Node, ...]) -> Node:
        i = len(key)
        j = i + len(plist)
        value = FunctionNode(
            kind="function_expression",
            parameters=xs[i:j],
            body=xs[j] if tail else None,
        )
        return OpaqueNode(kind="method_definition", children=xs[:i] + (value,))
    return key + plist + tail, build


def _plan(n: TSNode, src: bytes) -> Plan:
    t = n.type
    if t == "program":
        return _named(n), lambda xs: Program(body=xs)
    if t in JS_NODESETS["string"]:
        return _leaf(StringLiteral(value=_string_value(n, src)))
    if t in JS_NODESETS["ident"]:
        return _leaf(Identifier(name=node_text(n, src)))
    if t in JS_NODESETS["dynamic_import"]:
        return _leaf(ImportOperator())
    if t in JS_NODESETS["import"]:
        return _plan_import(n)
    if t in JS_NODESETS["call"]:
        return _plan_call(n)
    if t in JS_NODESETS["function"]:
        return _plan_function(n)
    if t in JS_NODESETS["method"]:
        return _plan_method(n)
    return _plan_opaque(n)


def lower(root: TSNode, src: bytes) -> Node:
    """Convert a tree-sitter tree into the lowered syntax variants (post-order, explicit stack)."""
    done: List[Node] = []
    # (node, None) is pending expansion; (node, (count, build)) is ready to assemble
    stack: List[Tuple[TSNode, Optional[Tuple[int, Build]]]] = [(root, None)]
    while stack:
        n, ready = stack.pop()
        if ready is None:
            inputs, build = _plan(n, src)
            stack.append((n, (len(inputs), build)))
            stack.extend((c, None) for c in reversed(inputs))
            continue
        count, build = ready
        children = tuple(done[len(done) - count:]) if count else ()
        if count:
            del done[len(done) - count:]
        done.append(build(children))
    return done[0]


# --- Entry points -----------------------------------------------------------

def parse_source(source: str, goal: ParseGoal = ParseGoal.MODULE) -> Program:
    """Parse ``source`` under one goal; raise ``JSParseError`` if the goal rejects it."""
    src = source.encode("utf-8", errors="replace")
    tree = create_parser().parse(src)
    root = tree.root_node

    if root.has_error:
        bad = _first_error(root)
        line = line_range(bad)[0] + 1 if bad is not None else 1
        raise JSParseError(f"Unexpected token (line {line})", goal)

    violation = _goal_violation(root, goal)
    if violation is not None:
        line = line_range(violation)[0] + 1
        if goal is ParseGoal.MODULE:
            msg = f"'return' outside of function (line {line})"
        else:
            msg = f"'import' and 'export' may appear only with 'sourceType: module' (line {line})"
        raise JSParseError(msg, goal)

    return lower(root, src)


def parse_javascript(source: str) -> Program:
    """Parse with the module goal first, then the script goal."""
    try:
        tree = parse_source(source, ParseGoal.MODULE)
        log.debug("Parsed as module")
        return tree
    except JSParseError as exc:
        log.debug("Module parse failed (%s); retrying as script", exc)
    tree = parse_source(source, ParseGoal.SCRIPT)
    log.debug("Parsed as script")
    return tree
