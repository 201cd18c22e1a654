"""
Command line entrypoint for the dusty efficiency linter.

Exit codes:
    0 - no diagnostics
    1 - at least one diagnostic, or no targets given (usage error)
    2 - configuration could not be loaded
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .config import ENV_CONFIG_PATH
from .config_utils import load_rule_config
from .debug_ast import syntax_tree_to_string
from .discovery import collect_files
from .parsing import JSParseError
from .report import format_text_report, to_sarif
from .runner import lint_paths, read_source

log = logging.getLogger(__name__)

USAGE = (
    "Usage: dusty <files-or-directories>\n"
    "Example: dusty lib/ test/ benchmark/"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dusty",
        description="Report top-level imports of heavy JavaScript dependencies that should be lazily loaded.",
    )
    parser.add_argument(
        "targets",
        nargs="*",
        help="JavaScript files (.js, .mjs) or directories to scan.",
    )
    parser.add_argument(
        "--config",
        required=False,
        default=None,
        help=f"Path to a YAML rule configuration. Defaults to ${ENV_CONFIG_PATH} if set.",
    )
    parser.add_argument(
        "--format",
        required=False,
        default="text",
        choices=["text", "sarif"],
        help="Report format. Defaults to text.",
    )
    parser.add_argument(
        "--output",
        required=False,
        default=None,
        help="Write the report to this file instead of stdout.",
    )
    parser.add_argument(
        "--jobs",
        required=False,
        type=int,
        default=1,
        help="Number of worker threads; 0 means one per CPU. Defaults to 1.",
    )
    parser.add_argument(
        "--log_level",
        required=False,
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING, ERROR). Defaults to INFO.",
    )
    parser.add_argument(
        "--dump_ast",
        action="store_true",
        help="Print the lowered syntax tree of every file instead of linting.",
    )
    return parser


def _dump_trees(targets: List[str]) -> int:
    for path in collect_files(targets):
        try:
            print(syntax_tree_to_string(read_source(path), path))
        except OSError as exc:
            log.warning("Unable to read %s: %s", path, exc)
        except JSParseError as exc:
            log.warning("Unable to parse %s: %s", path, exc)
        except RecursionError:
            log.warning("Unable to dump %s: syntax tree is nested too deeply", path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    level_name = (args.log_level or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if not args.targets:
        print(USAGE, file=sys.stderr)
        return 1

    if args.dump_ast:
        return _dump_trees(args.targets)

    config_path = args.config or os.environ.get(ENV_CONFIG_PATH)
    try:
        cfg = load_rule_config(config_path)
    except (FileNotFoundError, ValueError) as exc:
        log.error("Invalid configuration: %s", exc)
        return 2

    result = lint_paths(args.targets, cfg, jobs=args.jobs)

    if args.format == "sarif":
        output = json.dumps(to_sarif(result.diagnostics), indent=2, ensure_ascii=False)
    else:
        output = format_text_report(result.diagnostics)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output + "\n")
        log.info("Report written to %s", args.output)
    else:
        print(output)

    return 1 if result.total > 0 else 0


if __name__ == "__main__":
    sys.exit(main())
