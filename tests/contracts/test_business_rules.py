"""
Business Rule Contract Tests

These tests encode dashboard rules that must ALWAYS hold for the files in
data/. They catch logic errors that Pandera schema validation cannot detect.

They read the real generated outputs and skip when the pipeline has not
been run.

Run: pytest tests/contracts/test_business_rules.py -v
"""

import json
from pathlib import Path

import pandas as pd
import pytest

from config.mappings import ACCOUNTING_CLASSES, EQUIPMENT_CATEGORIES, FALLBACK_CLASS_GROUP, MONTHS
from config.paths import CURRENT_BUDGET_YEAR, PREVIOUS_BUDGET_YEAR
from contracts import BudgetRecordsSchema, DetailRecordsSchema, EquipmentCatalogSchema

# Paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA = PROJECT_ROOT / "data"
PUBLIC_DATA = PROJECT_ROOT / "public" / "data"
METADATA = DATA / "metadata"

BUDGET_FILES = [
    DATA / str(PREVIOUS_BUDGET_YEAR) / "orcado.csv",
    DATA / str(CURRENT_BUDGET_YEAR) / "orcado.csv",
    DATA / str(CURRENT_BUDGET_YEAR) / "realizado.csv",
]


def load_budget(path: Path) -> pd.DataFrame:
    if not path.exists():
        pytest.skip(f"{path.relative_to(PROJECT_ROOT)} not found")
    df = pd.read_csv(path, dtype={"classe_codigo": str}, keep_default_na=False)
    if len(df) == 0:
        pytest.skip(f"No records in {path.name}")
    return df


def load_json(path: Path) -> dict:
    if not path.exists():
        pytest.skip(f"{path.relative_to(PROJECT_ROOT)} not found")
    return json.loads(path.read_text(encoding="utf-8"))


# =============================================================================
# Budget record rules
# =============================================================================

@pytest.mark.parametrize("path", BUDGET_FILES, ids=lambda p: f"{p.parent.name}/{p.name}")
class TestBudgetRecordRules:
    """
    Rules for orcado.csv and realizado.csv.

    Every record is one positive amount for one accounting class, one
    equipment and one month of a single fiscal year.
    """

    def test_matches_contract(self, path):
        BudgetRecordsSchema.validate(load_budget(path))

    def test_single_year_per_file(self, path):
        """
        A file holds exactly the year of its directory.

        Business Rule: ano == <directory name>
        Reason: the dashboard picks files by year path, never by column.
        """
        df = load_budget(path)
        wrong = df[df["ano"] != int(path.parent.name)]
        assert len(wrong) == 0, f"Found {len(wrong)} records of other years: {wrong['ano'].unique().tolist()}"

    def test_no_zero_or_negative_amounts(self, path):
        """
        Zero months are never emitted and signs are dropped.

        Business Rule: valor > 0
        """
        df = load_budget(path)
        bad = df[df["valor"] <= 0]
        assert len(bad) == 0, f"Found {len(bad)} non-positive amounts"

    def test_months_are_abbreviations(self, path):
        df = load_budget(path)
        unknown = set(df["mes"]) - set(MONTHS)
        assert not unknown, f"Unknown month labels: {sorted(unknown)}"

    def test_class_group_follows_mapping(self, path):
        """
        Mapped codes carry their mapped group; unmapped codes the fallback.

        Business Rule: classe_orcamentaria == mapping(classe_codigo).group
        """
        df = load_budget(path)
        expected = df["classe_codigo"].map(
            lambda code: ACCOUNTING_CLASSES.get(code, (FALLBACK_CLASS_GROUP, None))[0]
        )
        mismatched = df[df["classe_orcamentaria"] != expected]
        assert len(mismatched) == 0, (
            f"Found {len(mismatched)} records with a group that contradicts the mapping. "
            f"Codes: {mismatched['classe_codigo'].unique()[:5].tolist()}"
        )


# =============================================================================
# Detail rules
# =============================================================================

class TestDetailRules:
    """Itemized lines only exist for equipment with a known category."""

    @pytest.fixture
    def details(self):
        path = DATA / str(CURRENT_BUDGET_YEAR) / "detalhes.csv"
        if not path.exists():
            pytest.skip("detalhes.csv not found")
        df = pd.read_csv(path, keep_default_na=False)
        if len(df) == 0:
            pytest.skip("No detail lines to validate")
        return df

    def test_matches_contract(self, details):
        DetailRecordsSchema.validate(details)

    def test_known_equipment_prefixes(self, details):
        prefixes = details["equipamento"].str.split("-").str[0]
        unknown = set(prefixes) - set(EQUIPMENT_CATEGORIES)
        assert not unknown, f"Detail lines for unknown equipment prefixes: {sorted(unknown)}"


# =============================================================================
# Metadata rules
# =============================================================================

class TestMetadataRules:
    """Rules for equipamentos.json and classes.json."""

    def test_equipment_catalog_contract(self):
        document = load_json(METADATA / "equipamentos.json")
        EquipmentCatalogSchema.validate(pd.DataFrame(document["equipamentos"]))

    def test_generic_bucket_present(self):
        """
        The generic bucket is always in the catalog.

        Reason: every budget file may hold GERAL records.
        """
        document = load_json(METADATA / "equipamentos.json")
        codes = [entry["codigo"] for entry in document["equipamentos"]]
        assert "GERAL" in codes

    def test_cost_centers_are_sequential(self):
        document = load_json(METADATA / "equipamentos.json")
        centers = [entry["centro_custo"] for entry in document["equipamentos"]]
        assert centers == [f"CC-{i:03d}" for i in range(1, len(centers) + 1)]

    def test_catalog_covers_budget_equipment(self):
        """Every valid tag used in the budgets has a catalog entry."""
        document = load_json(METADATA / "equipamentos.json")
        catalog = {entry["codigo"] for entry in document["equipamentos"]}

        used = set()
        for path in BUDGET_FILES:
            if path.exists():
                df = pd.read_csv(path, usecols=["equipamento"], dtype=str, keep_default_na=False)
                used |= set(df["equipamento"])
        prefixed = {tag for tag in used if tag.split("-")[0] in EQUIPMENT_CATEGORIES}
        missing = prefixed - catalog
        assert not missing, f"Equipment used in budgets but missing from catalog: {sorted(missing)[:5]}"

    def test_class_catalog_covers_mapping(self):
        document = load_json(METADATA / "classes.json")
        codes = {entry["codigo"] for entry in document["classes_orcamentarias"]}
        assert set(ACCOUNTING_CLASSES) <= codes


# =============================================================================
# Public mirror
# =============================================================================

def test_public_mirror_is_identical():
    """Files served to the browser are byte copies of data/."""
    if not DATA.exists() or not PUBLIC_DATA.exists():
        pytest.skip("Pipeline outputs not found")

    generated = [p for p in BUDGET_FILES if p.exists()]
    generated += [METADATA / name for name in ("equipamentos.json", "classes.json", "config.json")
                  if (METADATA / name).exists()]
    if not generated:
        pytest.skip("Pipeline outputs not found")

    for path in generated:
        mirror = PUBLIC_DATA / path.relative_to(DATA)
        assert mirror.exists(), f"Missing mirror for {path.relative_to(DATA)}"
        assert mirror.read_bytes() == path.read_bytes(), f"Mirror differs for {path.relative_to(DATA)}"
