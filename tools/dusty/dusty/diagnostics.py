from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List

from .config import RULE_ID


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    file: str
    rule: str
    message: str
    severity: Severity = Severity.WARNING

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["severity"] = self.severity.value
        return d


def lazy_import_message(specifier: str) -> str:
    return (
        f"Heavy dependency '{specifier}' should be lazily loaded to improve startup performance. "
        f"Consider using dynamic import() or require() inside functions."
    )


def emit_diagnostics(
    top_level_heavy: Iterable[str],
    file_path: str,
    severity: Severity = Severity.WARNING,
) -> List[Diagnostic]:
    """One diagnostic per top-level heavy specifier, in first-seen order."""
    return [
        Diagnostic(file=file_path, rule=RULE_ID, message=lazy_import_message(specifier), severity=severity)
        for specifier in top_level_heavy
    ]
