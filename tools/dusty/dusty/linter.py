from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .classifier import classify_imports
from .config_utils import RuleConfig
from .diagnostics import Diagnostic, emit_diagnostics
from .parsing import JSParseError, parse_javascript
from .syntax import Node

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseFailure:
    file: str
    message: str


class DustyLinter:
    """Runs the lazy-import rule over files and accumulates diagnostics."""

    def __init__(self, config: Optional[RuleConfig] = None) -> None:
        self.config = config or RuleConfig()
        self.diagnostics: List[Diagnostic] = []
        self.parse_failures: List[ParseFailure] = []

    def lint(self, file_path: str, content: str) -> List[Diagnostic]:
        if not self.config.enabled:
            return []
        try:
            tree = parse_javascript(content)
        except JSParseError as exc:
            log.warning("Unable to parse %s: %s", file_path, exc)
            self.parse_failures.append(ParseFailure(file=file_path, message=str(exc)))
            return []
        try:
            return self.check_lazy_import_heavy_deps(tree, file_path)
        except RecursionError:
            msg = "Syntax tree is nested too deeply to analyze"
            log.warning("Unable to analyze %s: %s", file_path, msg)
            self.parse_failures.append(ParseFailure(file=file_path, message=msg))
            return []

    def check_lazy_import_heavy_deps(self, tree: Node, file_path: str) -> List[Diagnostic]:
        result = classify_imports(tree, self.config.heavy_deps)
        found = emit_diagnostics(result.top_level_heavy, file_path, self.config.severity)
        self.diagnostics.extend(found)
        return found

    def get_diagnostics(self) -> List[Diagnostic]:
        return list(self.diagnostics)

    def reset(self) -> None:
        self.diagnostics = []
        self.parse_failures = []
