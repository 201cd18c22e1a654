import sys
from pathlib import Path

import pytest

PKG_ROOT = Path(__file__).resolve().parents[1]
if str(PKG_ROOT) not in sys.path:
    sys.path.insert(0, str(PKG_ROOT))


def pytest_sessionstart(session):
    missing = []
    for mod in ["tree_sitter", "tree_sitter_javascript", "yaml", "dotenv"]:
        try:
            __import__(mod)
        except Exception:
            missing.append(mod)
    if missing:
        pytest.exit(f"Missing dependencies: {', '.join(missing)}", returncode=1)


@pytest.fixture()
def write_js(tmp_path):
    """Create a file under tmp_path and return its path as a string."""
    def _write(rel: str, content: str) -> str:
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
        return str(p)
    return _write


@pytest.fixture(autouse=True)
def _clean_dusty_env(monkeypatch):
    for var in ("DUSTY_CONFIG", "DUSTY_SEVERITY", "DUSTY_ADDITIONAL_HEAVY_DEPS"):
        monkeypatch.delenv(var, raising=False)
