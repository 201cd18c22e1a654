"""Dusty efficiency linter package.

Keep the package init lightweight: importing ``dusty`` must not load the
tree-sitter grammar. Public names are resolved lazily via __getattr__.
"""

_EXPORTS = {
    "DustyLinter": "linter",
    "Diagnostic": "diagnostics",
    "Severity": "diagnostics",
    "RuleConfig": "config_utils",
    "load_rule_config": "config_utils",
    "is_heavy_dependency": "matcher",
    "lint_paths": "runner",
    "LintResult": "runner",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str):
    if name in _EXPORTS:
        from importlib import import_module
        return getattr(import_module(f".{_EXPORTS[name]}", __name__), name)
    raise AttributeError(name)
