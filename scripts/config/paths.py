"""
Centralized path configuration for the budget conversion pipeline.

This module contains all paths and run constants used across the
conversion scripts.
"""

import os
from pathlib import Path

# =============================================================================
# BASE PATHS
# =============================================================================

# Project root (parent of scripts/). Overridable so the pipeline can run
# against a copy of the data tree.
PROJECT_ROOT = Path(
    os.environ.get("ORCAMENTO_PROJECT_ROOT", Path(__file__).resolve().parent.parent.parent)
)

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DIR = DATA_DIR / "raw"
INTERMEDIATE_DIR = DATA_DIR / "intermediate"
METADATA_DIR = DATA_DIR / "metadata"

# The dashboard serves a copy of data/ from public/data/
PUBLIC_DATA_DIR = PROJECT_ROOT / "public" / "data"

# =============================================================================
# RUN CONSTANTS
# =============================================================================

# Fiscal year kept when filtering ledger exports
TARGET_YEAR = 2026

# Budget years produced by the detailed sheet
PREVIOUS_BUDGET_YEAR = 2025
CURRENT_BUDGET_YEAR = 2026

# =============================================================================
# RAW FILE PATHS (exports as dropped by the accounting team)
# =============================================================================

RAW_EQUIPMENT_BUDGET_FILE = RAW_DIR / "Orçamento 2026 -Dashboard - csv.csv"
RAW_DETAILED_BUDGET_FILE = RAW_DIR / "orçamento detalhado 2026 - Dashboard - csv.csv"
RAW_GENERAL_LEDGER_FILE = RAW_DIR / "razao contabil.csv"
RAW_ITEMIZED_LEDGER_FILE = RAW_DIR / "razao por item.csv"

# =============================================================================
# INTERMEDIATE FILE PATHS
# =============================================================================

INTERMEDIATE_EQUIPMENT_BUDGET = INTERMEDIATE_DIR / "orcado_2026_equipamentos.csv"
INTERMEDIATE_DETAILED_2025 = INTERMEDIATE_DIR / "orcado_2025_detalhado.csv"
INTERMEDIATE_DETAILED_2026 = INTERMEDIATE_DIR / "orcado_2026_detalhado.csv"


def intermediate_ledger_file(year: int) -> Path:
    return INTERMEDIATE_DIR / f"realizado_{year}_razao.csv"


def intermediate_itemized_file(year: int) -> Path:
    return INTERMEDIATE_DIR / f"realizado_{year}_itens.csv"


def intermediate_details_file(year: int) -> Path:
    return INTERMEDIATE_DIR / f"detalhes_{year}.csv"


# =============================================================================
# DASHBOARD FILE PATHS (relative layout shared by data/ and public/data/)
# =============================================================================

def budget_file(year: int, data_dir: Path = DATA_DIR) -> Path:
    """Budgeted (orçado) records for a year."""
    return data_dir / str(year) / "orcado.csv"


def actual_file(year: int, data_dir: Path = DATA_DIR) -> Path:
    """Actual (realizado) records for a year."""
    return data_dir / str(year) / "realizado.csv"


def details_file(year: int, data_dir: Path = DATA_DIR) -> Path:
    """Itemized detail records for a year."""
    return data_dir / str(year) / "detalhes.csv"


EQUIPMENT_CATALOG_NAME = "equipamentos.json"
CLASS_CATALOG_NAME = "classes.json"
DASHBOARD_CONFIG_NAME = "config.json"


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def ensure_directories():
    """Create all required directories if they don't exist."""
    for directory in [RAW_DIR, INTERMEDIATE_DIR, METADATA_DIR, PUBLIC_DATA_DIR / "metadata"]:
        directory.mkdir(parents=True, exist_ok=True)


def print_config():
    """Print current configuration for debugging."""
    print("=" * 60)
    print("PIPELINE CONFIGURATION")
    print("=" * 60)
    print(f"Project Root:     {PROJECT_ROOT}")
    print(f"Raw Data:         {RAW_DIR}")
    print(f"Intermediate:     {INTERMEDIATE_DIR}")
    print(f"Metadata:         {METADATA_DIR}")
    print(f"Public Data:      {PUBLIC_DATA_DIR}")
    print(f"Target Year:      {TARGET_YEAR}")
    print("=" * 60)


if __name__ == "__main__":
    print_config()
