import pytest

from dusty.debug_ast import DumpOpts, syntax_tree_to_string
from dusty.parsing import JSParseError

pytestmark = pytest.mark.js


def test_dump_shows_fields_and_depths():
    out = syntax_tree_to_string("const w = require('webpack');\nconst f = () => import('react');\n", "x.js")
    lines = out.splitlines()
    assert lines[0] == "// file=x.js"
    assert lines[2] == "program [depth=0]"
    assert any(l.strip() == 'callee: identifier require [depth=0]' for l in lines)
    assert any(l.strip() == 'arguments: string "webpack" [depth=0]' for l in lines)
    assert any(l.endswith("arrow_function (scope boundary) [depth=0]") for l in lines)
    assert any(l.strip() == 'arguments: string "react" [depth=1]' for l in lines)


def test_dump_without_depth_and_truncation():
    out = syntax_tree_to_string("a(); b(); c();\n", opts=DumpOpts(max_nodes=3, show_depth=False))
    lines = out.splitlines()
    assert "[depth=" not in out
    assert lines[-1].strip().startswith("… (truncated at 3 nodes)")
    assert len(lines) == 2 + 3 + 1


def test_long_strings_are_shortened():
    out = syntax_tree_to_string("require('" + "x" * 100 + "');\n", opts=DumpOpts(text_limit=10))
    assert 'string "xxxxxxxxxx…"' in out


def test_dump_propagates_parse_errors():
    with pytest.raises(JSParseError):
        syntax_tree_to_string("function ((( {\n")
