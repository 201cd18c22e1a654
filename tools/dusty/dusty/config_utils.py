"""
Rule configuration loading.

The configuration file is YAML with one recognised top-level key, the rule
id ``lazy-import-heavy-js-deps``::

    lazy-import-heavy-js-deps:
      enabled: true
      severity: warning          # or "error"
      additionalHeavyDeps:       # appended to the base heavy set
        - three
      heavyDeps: [webpack]       # optional: replaces the built-in base set

Any other keys are ignored. ``DUSTY_SEVERITY`` and ``DUSTY_ADDITIONAL_HEAVY_DEPS``
(comma separated) override the file when set in the environment.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Tuple

import yaml  # type: ignore

from .config import (
    DEFAULT_HEAVY_DEPENDENCIES, ENV_ADDITIONAL_HEAVY_DEPS, ENV_SEVERITY, RULE_ID,
)
from .diagnostics import Severity
from .matcher import normalize_heavy_deps

log = logging.getLogger(__name__)

RULE_KEYS = {"enabled", "severity", "additionalHeavyDeps", "heavyDeps"}


@dataclass(frozen=True)
class RuleConfig:
    enabled: bool = True
    severity: Severity = Severity.WARNING
    heavy_deps: Tuple[str, ...] = DEFAULT_HEAVY_DEPENDENCIES


def parse_severity(value: Any) -> Severity:
    try:
        return Severity(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in Severity)
        raise ValueError(f"Invalid severity '{value}' for {RULE_ID}: expected one of {allowed}") from None


def _string_list(value: Any, key: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{RULE_ID}.{key} must be a list of strings, got {value!r}")
    return list(value)


def rule_config_from_mapping(data: Optional[Mapping[str, Any]]) -> RuleConfig:
    """Build a ``RuleConfig`` from an already-loaded configuration mapping."""
    if not data:
        return RuleConfig()
    if not isinstance(data, Mapping):
        raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")

    for key in data:
        if key != RULE_ID:
            log.debug("Ignoring unrecognised configuration key '%s'", key)

    rule = data.get(RULE_ID)
    if rule is None:
        return RuleConfig()
    if not isinstance(rule, Mapping):
        raise ValueError(f"{RULE_ID} must be a mapping, got {type(rule).__name__}")

    extra = sorted(str(k) for k in rule if k not in RULE_KEYS)
    if extra:
        log.debug("Ignoring unrecognised %s keys: %s", RULE_ID, extra)

    enabled = rule.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ValueError(f"{RULE_ID}.enabled must be a boolean, got {enabled!r}")

    severity = parse_severity(rule.get("severity", Severity.WARNING.value))

    if "heavyDeps" in rule and rule["heavyDeps"] is not None:
        base = _string_list(rule["heavyDeps"], "heavyDeps")
    else:
        base = list(DEFAULT_HEAVY_DEPENDENCIES)
    additional = _string_list(rule.get("additionalHeavyDeps"), "additionalHeavyDeps")

    return RuleConfig(
        enabled=enabled,
        severity=severity,
        heavy_deps=normalize_heavy_deps(base + additional),
    )


def apply_env_overrides(cfg: RuleConfig, environ: Optional[Mapping[str, str]] = None) -> RuleConfig:
    environ = os.environ if environ is None else environ
    raw_severity = environ.get(ENV_SEVERITY)
    if raw_severity:
        cfg = replace(cfg, severity=parse_severity(raw_severity))
    raw_deps = environ.get(ENV_ADDITIONAL_HEAVY_DEPS)
    if raw_deps:
        extra = [d.strip() for d in raw_deps.split(",") if d.strip()]
        cfg = replace(cfg, heavy_deps=normalize_heavy_deps(list(cfg.heavy_deps) + extra))
    return cfg


def load_rule_config(path: Optional[str] = None) -> RuleConfig:
    """Load the rule configuration from a YAML file (if given) plus environment overrides.

    :param path: Path to the YAML configuration file, or ``None`` for defaults.
    :raises FileNotFoundError: if ``path`` does not exist.
    :raises ValueError: if the file content is not a valid configuration.
    """
    data: Any = None
    if path:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Configuration file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ValueError(f"Failed to load configuration from {path}: {exc}") from exc
        log.debug("Loaded configuration from %s: %s", path, data)
    return apply_env_overrides(rule_config_from_mapping(data))
