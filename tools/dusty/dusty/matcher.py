from __future__ import annotations
from typing import Iterable, Tuple


def _is_bare_name(name: str) -> bool:
    if name.startswith("@"):
        scope, sep, pkg = name[1:].partition("/")
        return bool(scope and sep and pkg) and "/" not in pkg
    return "/" not in name


def normalize_heavy_deps(names: Iterable[str]) -> Tuple[str, ...]:
    """Validate heavy-dependency names and drop duplicates (first occurrence wins)."""
    out: dict[str, None] = {}
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Heavy dependency names must be non-empty strings, got {name!r}")
        if not _is_bare_name(name):
            raise ValueError(
                f"Heavy dependency '{name}' must be a package name ('pkg' or '@scope/pkg'), not a path"
            )
        out.setdefault(name, None)
    return tuple(out)


def _is_org_fork(specifier: str, dep: str) -> bool:
    # @<scope>/<dep> or @<scope>/<dep>/<sub/path>
    if not specifier.startswith("@"):
        return False
    parts = specifier[1:].split("/", 2)
    return len(parts) >= 2 and bool(parts[0]) and parts[1] == dep


def is_heavy_dependency(specifier: str, heavy_deps: Iterable[str]) -> bool:
    """
    Decide whether an import specifier targets a heavy dependency.

    Matches the exact name, sub-paths (``dep/sub``, ``@scope/dep/sub``) and, for
    unscoped names, scope-wrapped variants (``@dep/x``, ``@org/dep``). Matching is
    always on a whole ``/`` segment: ``webpackx`` does not match ``webpack``.
    """
    heavy_deps = tuple(heavy_deps)
    if specifier in heavy_deps:
        return True
    for dep in heavy_deps:
        if specifier.startswith(dep + "/"):
            return True
        if not dep.startswith("@"):
            if specifier.startswith("@" + dep + "/") or _is_org_fork(specifier, dep):
                return True
    return False
