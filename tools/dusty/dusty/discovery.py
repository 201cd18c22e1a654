from __future__ import annotations

import logging
import os
from typing import Iterable, List

from .config import SCRIPT_EXTENSIONS, SKIP_DIRECTORIES

log = logging.getLogger(__name__)


def is_script_file(name: str) -> bool:
    return name.endswith(SCRIPT_EXTENSIONS)


def _enter_directory(parent: str, name: str) -> bool:
    if name.startswith(".") or name in SKIP_DIRECTORIES:
        return False
    return os.access(os.path.join(parent, name), os.R_OK | os.X_OK)


def find_js_files(target: str) -> List[str]:
    """
    Return script files under ``target`` (a file or a directory).

    Hidden directories and ``node_modules`` are skipped, unreadable
    subdirectories are not entered and walk errors are ignored.
    """
    if os.path.isfile(target):
        return [target] if is_script_file(target) else []
    if not os.path.isdir(target):
        log.warning("Target does not exist: %s", target)
        return []

    files: List[str] = []
    for dirpath, dirnames, filenames in os.walk(target):
        # prune in place so os.walk does not descend
        dirnames[:] = sorted(d for d in dirnames if _enter_directory(dirpath, d))
        for name in sorted(filenames):
            full = os.path.join(dirpath, name)
            if is_script_file(name) and os.path.isfile(full):
                files.append(full)
    log.debug("Found %d script files under %s", len(files), target)
    return files


def collect_files(targets: Iterable[str]) -> List[str]:
    seen: dict[str, None] = {}
    for target in targets:
        for path in find_js_files(target):
            seen.setdefault(path, None)
    return list(seen)
