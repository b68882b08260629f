# tests/test_packaging.py

import pytest
from pathlib import Path

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"

def test_project_metadata():
    meta = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["project"]
    assert meta["name"] == "lunacal"
    assert "readme" not in meta
    assert meta["dependencies"] == []
    assert set(meta["optional-dependencies"]) == {"diagnostics", "ephemeris", "test"}
    assert meta["scripts"]["lunacal"] == "lunacal.cli:main"
