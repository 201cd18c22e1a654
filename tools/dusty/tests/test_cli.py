import json

import pytest

from dusty.cli import main

pytestmark = pytest.mark.js


def test_no_targets_prints_usage(capsys):
    assert main([]) == 1
    assert "Usage: dusty" in capsys.readouterr().err


def test_clean_project_exits_zero(write_js, capsys):
    path = write_js("ok.js", "const path = require('path');\nfunction f() { return require('webpack'); }\n")
    assert main([path]) == 0
    assert "No issues found" in capsys.readouterr().out


def test_findings_exit_one(write_js, capsys):
    path = write_js("bad.js", "const webpack = require('webpack');\n")
    assert main([path]) == 1
    out = capsys.readouterr().out
    assert "Found 1 efficiency issues." in out
    assert f"{path}:" in out


def test_sarif_to_file(tmp_path, write_js):
    src = write_js("src/app.mjs", "import React from 'react';\n")
    out = tmp_path / "report.sarif"
    assert main([str(tmp_path / "src"), "--format", "sarif", "--output", str(out), "--jobs", "2"]) == 1
    data = json.loads(out.read_text(encoding="utf-8"))
    (result,) = data["runs"][0]["results"]
    assert result["locations"][0]["physicalLocation"]["artifactLocation"]["uri"].endswith("app.mjs")
    assert src.endswith("app.mjs")


def test_config_file_and_env(tmp_path, write_js, monkeypatch):
    path = write_js("a.js", "require('three');\n")
    cfg = tmp_path / "dusty.yml"
    cfg.write_text("lazy-import-heavy-js-deps:\n  additionalHeavyDeps: [three]\n", encoding="utf-8")
    assert main([path]) == 0
    assert main([path, "--config", str(cfg)]) == 1
    monkeypatch.setenv("DUSTY_CONFIG", str(cfg))
    assert main([path]) == 1


def test_bad_config_exits_two(tmp_path, write_js):
    path = write_js("a.js", "require('webpack');\n")
    cfg = tmp_path / "dusty.yml"
    cfg.write_text("lazy-import-heavy-js-deps:\n  severity: fatal\n", encoding="utf-8")
    assert main([path, "--config", str(cfg)]) == 2
    assert main([path, "--config", str(tmp_path / "missing.yml")]) == 2


def test_dump_ast(write_js, capsys):
    path = write_js("a.js", "function f() { require('webpack'); }\n")
    assert main([path, "--dump_ast"]) == 0
    out = capsys.readouterr().out
    assert f"// file={path}" in out
    assert 'string "webpack" [depth=1]' in out
