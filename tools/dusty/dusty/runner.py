"""
Batch linting of files and directories.

Each file is linted by its own ``DustyLinter`` when ``jobs > 1`` so that no
parser, scope counter or accumulator is shared between threads. Results are
always assembled in discovery order.
"""
from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .config_utils import RuleConfig
from .diagnostics import Diagnostic
from .discovery import collect_files
from .linter import DustyLinter, ParseFailure

log = logging.getLogger(__name__)


@dataclass
class LintResult:
    diagnostics: List[Diagnostic] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    parse_failures: List[ParseFailure] = field(default_factory=list)
    read_failures: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.diagnostics)


def read_source(path: str) -> str:
    return Path(path).read_text(encoding="utf-8", errors="replace")


def _lint_one(path: str, linter: DustyLinter) -> Tuple[List[Diagnostic], List[ParseFailure], bool]:
    try:
        content = read_source(path)
    except OSError as exc:
        log.warning("Unable to read %s: %s", path, exc)
        return [], [], False
    before = len(linter.parse_failures)
    found = linter.lint(path, content)
    return found, linter.parse_failures[before:], True


def lint_paths(
    targets: Iterable[str],
    config: Optional[RuleConfig] = None,
    jobs: int = 1,
) -> LintResult:
    """Discover script files under ``targets`` and lint them.

    :param targets: Files and/or directories.
    :param config: Rule configuration; defaults to the built-in one.
    :param jobs: Number of worker threads (``<= 0`` means one per CPU).
    """
    files = collect_files(targets)
    result = LintResult()
    if jobs <= 0:
        jobs = max(1, os.cpu_count() or 4)

    if jobs == 1 or len(files) <= 1:
        linter = DustyLinter(config)
        outcomes = [_lint_one(path, linter) for path in files]
    else:
        outcomes_by_index: dict[int, Tuple[List[Diagnostic], List[ParseFailure], bool]] = {}
        with ThreadPoolExecutor(max_workers=jobs) as ex:
            futures = {ex.submit(_lint_one, path, DustyLinter(config)): i for i, path in enumerate(files)}
            for fut in as_completed(futures):
                outcomes_by_index[futures[fut]] = fut.result()
        outcomes = [outcomes_by_index[i] for i in range(len(files))]

    for path, (found, failures, was_read) in zip(files, outcomes):
        if not was_read:
            result.read_failures.append(path)
            continue
        result.files.append(path)
        result.diagnostics.extend(found)
        result.parse_failures.extend(failures)

    log.debug("Linted %d files, %d diagnostics", len(result.files), result.total)
    return result
