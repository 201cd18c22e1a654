from __future__ import annotations
from tree_sitter import Language, Parser, Node
import tree_sitter_javascript as js_lang


def _resolve_language(mod, *candidate_funcs: str) -> Language:
    """
    Return a tree_sitter.Language by trying a list of possible factory names
    exported by the grammar module (language(), language_javascript(), etc).
    """
    for name in candidate_funcs:
        fn = getattr(mod, name, None)
        if callable(fn):
            return Language(fn())
    raise AttributeError(f"{mod.__name__} has none of {candidate_funcs}")

# Load compiled language once
JS_LANGUAGE = _resolve_language(js_lang, "language", "language_javascript")


def create_parser(lang: Language = JS_LANGUAGE) -> Parser:
    # One parser per call: parsers are not shared between threads
    return Parser(lang)

def node_text(node: Node, src: bytes) -> str:
    return src[node.start_byte: node.end_byte].decode("utf-8", errors="replace")

def line_range(node: Node) -> tuple[int, int]:
    return node.start_point[0], node.end_point[0]
