from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

from .config import REQUIRE_IDENTIFIER
from .matcher import is_heavy_dependency
from .syntax import CallExpression, Identifier, ImportDeclaration, ImportOperator, Node, StringLiteral
from .walker import ScopeTracker, walk


class SyntaxForm(str, Enum):
    STATIC_IMPORT = "static-import"
    REQUIRE_CALL = "require-call"
    DYNAMIC_IMPORT = "dynamic-import"


@dataclass(frozen=True)
class ImportSite:
    specifier: str
    depth: int
    syntax_form: SyntaxForm


@dataclass
class ImportClassification:
    # dicts used as insertion-ordered sets
    top_level_heavy: Dict[str, None] = field(default_factory=dict)
    lazy_heavy: Dict[str, None] = field(default_factory=dict)

    def record(self, site: ImportSite) -> None:
        if site.syntax_form is SyntaxForm.DYNAMIC_IMPORT or site.depth > 0:
            self.lazy_heavy.setdefault(site.specifier, None)
        else:
            self.top_level_heavy.setdefault(site.specifier, None)


@dataclass
class ClassificationContext:
    heavy_deps: Tuple[str, ...]
    scope: ScopeTracker = field(default_factory=ScopeTracker)
    result: ImportClassification = field(default_factory=ImportClassification)


def _first_string_argument(call: CallExpression) -> Optional[str]:
    if not call.arguments:
        return None
    first = call.arguments[0]
    if isinstance(first, StringLiteral):
        return first.value
    return None


class ImportClassifier:
    """Walk callback that sorts heavy import sites into top-level and lazy."""

    @staticmethod
    def import_site(node: Node, depth: int) -> Optional[ImportSite]:
        if isinstance(node, ImportDeclaration):
            # static imports below top level are not valid JS; ignore them
            if depth == 0 and isinstance(node.source, StringLiteral):
                return ImportSite(node.source.value, depth, SyntaxForm.STATIC_IMPORT)
            return None
        if isinstance(node, CallExpression):
            specifier = _first_string_argument(node)
            if specifier is None:
                return None
            callee = node.callee
            if isinstance(callee, Identifier) and callee.name == REQUIRE_IDENTIFIER:
                return ImportSite(specifier, depth, SyntaxForm.REQUIRE_CALL)
            if isinstance(callee, ImportOperator):
                return ImportSite(specifier, depth, SyntaxForm.DYNAMIC_IMPORT)
        return None

    def on_enter(self, node: Node, context: ClassificationContext) -> None:
        site = self.import_site(node, context.scope.depth)
        if site is not None and is_heavy_dependency(site.specifier, context.heavy_deps):
            context.result.record(site)


def classify_imports(tree: Node, heavy_deps: Iterable[str]) -> ImportClassification:
    context = ClassificationContext(heavy_deps=tuple(heavy_deps))
    walk(tree, ImportClassifier().on_enter, context)
    return context.result
