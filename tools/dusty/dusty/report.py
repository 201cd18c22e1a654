from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .config import RULE_ID
from .diagnostics import Diagnostic, Severity

TOOL_NAME = "dusty"
SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"


def format_text_report(diagnostics: Sequence[Diagnostic]) -> str:
    """Human readable report grouped by file, with a summary line."""
    if not diagnostics:
        return "Dusty efficiency linter: No issues found."

    by_file: Dict[str, List[Diagnostic]] = {}
    for d in diagnostics:
        by_file.setdefault(d.file, []).append(d)

    lines = ["", "Dusty Efficiency Linter Results:", "================================="]
    for file, items in by_file.items():
        lines.append(f"{file}:")
        for d in items:
            lines.append(f"  {d.severity.value}: {d.message} [{d.rule}]")
        lines.append("")
    lines.append(f"Found {len(diagnostics)} efficiency issues.")
    return "\n".join(lines)


def _sarif_level(severity: Severity) -> str:
    return "error" if severity is Severity.ERROR else "warning"


def to_sarif(diagnostics: Sequence[Diagnostic]) -> Dict[str, Any]:
    """SARIF 2.1.0 log with one run and one result per diagnostic."""
    results = []
    for d in diagnostics:
        results.append({
            "ruleId": d.rule,
            "level": _sarif_level(d.severity),
            "message": {"text": d.message},
            "locations": [
                {"physicalLocation": {"artifactLocation": {"uri": d.file.replace("\\", "/")}}}
            ],
        })
    return {
        "$schema": SARIF_SCHEMA,
        "version": "2.1.0",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": TOOL_NAME,
                        "rules": [
                            {
                                "id": RULE_ID,
                                "shortDescription": {
                                    "text": "Heavy dependencies should be loaded lazily, not at module top level."
                                },
                            }
                        ],
                    }
                },
                "results": results,
            }
        ],
    }
