import json

from dusty.config import RULE_ID
from dusty.diagnostics import Diagnostic, Severity, lazy_import_message
from dusty.report import TOOL_NAME, format_text_report, to_sarif


def diag(file, specifier, severity=Severity.WARNING):
    return Diagnostic(file=file, rule=RULE_ID, message=lazy_import_message(specifier), severity=severity)


def test_text_report_empty():
    assert format_text_report([]) == "Dusty efficiency linter: No issues found."


def test_text_report_groups_by_file():
    text = format_text_report([diag("a.js", "webpack"), diag("b.js", "react", Severity.ERROR), diag("a.js", "jest")])
    lines = text.splitlines()
    assert lines[1] == "Dusty Efficiency Linter Results:"
    assert lines[2].startswith("====")
    assert lines[3] == "a.js:"
    assert lines[4].startswith("  warning: Heavy dependency 'webpack'")
    assert lines[4].endswith(f"[{RULE_ID}]")
    assert lines[5].startswith("  warning: Heavy dependency 'jest'")
    assert lines[6] == ""
    assert lines[7] == "b.js:"
    assert lines[8].startswith("  error: ")
    assert lines[-1] == "Found 3 efficiency issues."


def test_sarif_structure():
    log = to_sarif([diag("src\\a.js", "webpack"), diag("b.js", "react", Severity.ERROR)])
    json.dumps(log)
    assert log["version"] == "2.1.0"
    (run,) = log["runs"]
    assert run["tool"]["driver"]["name"] == TOOL_NAME
    assert run["tool"]["driver"]["rules"][0]["id"] == RULE_ID
    first, second = run["results"]
    assert first["ruleId"] == RULE_ID
    assert first["level"] == "warning"
    assert "'webpack'" in first["message"]["text"]
    assert first["locations"][0]["physicalLocation"]["artifactLocation"]["uri"] == "src/a.js"
    assert second["level"] == "error"


def test_sarif_empty():
    assert to_sarif([])["runs"][0]["results"] == []
