"""Shared fixtures: scripts/ on sys.path and loaders for the numbered scripts."""

import importlib.util
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
SCRIPTS_DIR = PROJECT_ROOT / "scripts"
sys.path.insert(0, str(SCRIPTS_DIR))


def load_script(rel_path: str):
    """Import a numbered pipeline script (not importable by name) as a module."""
    path = SCRIPTS_DIR / rel_path
    module_name = "script_" + path.stem.replace("-", "_")
    spec = importlib.util.spec_from_file_location(module_name, path)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def script_loader():
    return load_script


def month_cells(values: dict) -> list:
    """Twelve month cells with the given {month_index: text} filled in."""
    return [values.get(i, "") for i in range(12)]


@pytest.fixture
def equipment_sheet_line():
    """Builder for a line of the per-equipment budget sheet (';', 17 columns)."""
    def build(classe="421101", descricao="SALARIOS", grupo="PESSOAL", months=None, equipamento=""):
        cells = [classe, descricao, grupo] + month_cells(months or {}) + ["", equipamento]
        return ";".join(cells)
    return build


@pytest.fixture
def detailed_sheet_line():
    """Builder for a line of the detailed budget sheet (';', 30 columns)."""
    def build(classe="421101", descricao="SALARIOS", previous=None, current=None):
        cells = (
            [classe, descricao]
            + month_cells(previous or {})
            + ["TOTAL", ""]
            + month_cells(current or {})
            + ["TOTAL", ""]
        )
        return ";".join(cells)
    return build
