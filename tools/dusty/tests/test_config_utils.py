import textwrap

import pytest

from dusty.config import DEFAULT_HEAVY_DEPENDENCIES
from dusty.config_utils import (
    RuleConfig, apply_env_overrides, load_rule_config, parse_severity, rule_config_from_mapping,
)
from dusty.diagnostics import Severity


def write_yaml(tmp_path, body: str) -> str:
    p = tmp_path / "dusty.yml"
    p.write_text(textwrap.dedent(body), encoding="utf-8")
    return str(p)


def test_defaults_without_file():
    cfg = load_rule_config(None)
    assert cfg == RuleConfig()
    assert cfg.heavy_deps == DEFAULT_HEAVY_DEPENDENCIES


def test_load_full_rule_block(tmp_path):
    path = write_yaml(tmp_path, """
        lazy-import-heavy-js-deps:
          enabled: true
          severity: error
          additionalHeavyDeps:
            - three
            - webpack
        other-tool:
          foo: bar
    """)
    cfg = load_rule_config(path)
    assert cfg.severity is Severity.ERROR
    assert cfg.heavy_deps[-1] == "three"
    assert cfg.heavy_deps.count("webpack") == 1


def test_heavy_deps_replaces_base_set(tmp_path):
    path = write_yaml(tmp_path, """
        lazy-import-heavy-js-deps:
          heavyDeps: [webpack]
          additionalHeavyDeps: ["@scope/tool"]
    """)
    assert load_rule_config(path).heavy_deps == ("webpack", "@scope/tool")


def test_empty_heavy_deps_gives_empty_set():
    cfg = rule_config_from_mapping({"lazy-import-heavy-js-deps": {"heavyDeps": []}})
    assert cfg.heavy_deps == ()


def test_unknown_keys_are_ignored():
    cfg = rule_config_from_mapping({"lazy-import-heavy-js-deps": {"enabled": False, "colour": "red"}})
    assert cfg.enabled is False


def test_empty_file_gives_defaults(tmp_path):
    assert load_rule_config(write_yaml(tmp_path, "")) == RuleConfig()


@pytest.mark.parametrize(
    "data",
    [
        ["not", "a", "mapping"],
        {"lazy-import-heavy-js-deps": "on"},
        {"lazy-import-heavy-js-deps": {"enabled": "yes"}},
        {"lazy-import-heavy-js-deps": {"severity": "fatal"}},
        {"lazy-import-heavy-js-deps": {"additionalHeavyDeps": "three"}},
        {"lazy-import-heavy-js-deps": {"additionalHeavyDeps": ["lodash/fp"]}},
        {"lazy-import-heavy-js-deps": {"heavyDeps": [1, 2]}},
    ],
)
def test_invalid_configuration(data):
    with pytest.raises(ValueError):
        rule_config_from_mapping(data)


def test_invalid_yaml(tmp_path):
    path = write_yaml(tmp_path, "lazy-import-heavy-js-deps: [unclosed\n")
    with pytest.raises(ValueError):
        load_rule_config(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rule_config(str(tmp_path / "nope.yml"))


@pytest.mark.parametrize("raw, expected", [("warning", Severity.WARNING), (" ERROR ", Severity.ERROR)])
def test_parse_severity(raw, expected):
    assert parse_severity(raw) is expected


def test_env_overrides_explicit_mapping():
    cfg = apply_env_overrides(
        RuleConfig(heavy_deps=("webpack",)),
        {"DUSTY_SEVERITY": "error", "DUSTY_ADDITIONAL_HEAVY_DEPS": "three, ,d3"},
    )
    assert cfg.severity is Severity.ERROR
    assert cfg.heavy_deps == ("webpack", "three", "d3")


def test_env_overrides_apply_on_load(tmp_path, monkeypatch):
    path = write_yaml(tmp_path, """
        lazy-import-heavy-js-deps:
          severity: warning
    """)
    monkeypatch.setenv("DUSTY_SEVERITY", "error")
    assert load_rule_config(path).severity is Severity.ERROR


def test_invalid_env_severity(monkeypatch):
    monkeypatch.setenv("DUSTY_SEVERITY", "loud")
    with pytest.raises(ValueError):
        load_rule_config(None)
