"""
Equipment and accounting-class catalogs for the dashboard metadata.

The equipment catalog is rebuilt from the equipment tags seen in the
long-format outputs; the generic bucket is always present and cost
centers are assigned sequentially in code order.
"""

from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Set

import pandas as pd

from config.mappings import (
    ACCOUNTING_CLASSES,
    DEFAULT_CONTACT_EMAIL,
    DEFAULT_OWNER,
    GENERIC_CATEGORY,
    GENERIC_DESCRIPTION,
    GENERIC_EQUIPMENT,
)
from contracts import EquipmentCatalogSchema
from orcamento.classifiers import (
    cost_center_for_class,
    extract_equipment_category,
    is_valid_equipment_code,
    map_accounting_class,
)
from orcamento.models import EquipmentEntry


def collect_equipment_tags(paths: Iterable[Path]) -> Set[str]:
    """
    Distinct values of the `equipamento` column across several CSVs.

    A missing or unreadable file is reported and contributes nothing.
    """
    tags: Set[str] = set()
    for path in paths:
        try:
            df = pd.read_csv(path, usecols=["equipamento"], dtype=str, keep_default_na=False)
        except (OSError, ValueError, pd.errors.ParserError) as exc:
            print(f"  Warning: could not read {path}: {exc}")
            continue
        found = {tag.strip() for tag in df["equipamento"] if tag.strip()}
        print(f"  {Path(path).name}: {len(found):,} distinct equipment values")
        tags |= found
    return tags


def collect_class_codes(paths: Iterable[Path]) -> Set[str]:
    codes: Set[str] = set()
    for path in paths:
        try:
            df = pd.read_csv(path, usecols=["classe_codigo"], dtype=str, keep_default_na=False)
        except (OSError, ValueError, pd.errors.ParserError) as exc:
            print(f"  Warning: could not read {path}: {exc}")
            continue
        codes |= {code.strip() for code in df["classe_codigo"] if code.strip()}
    return codes


def _describe(code: str, category) -> str:
    if code == GENERIC_EQUIPMENT:
        return GENERIC_DESCRIPTION
    return f"{category} {code}"


def build_equipment_catalog(tags: Iterable[str]) -> List[EquipmentEntry]:
    """Valid tags plus the generic bucket, sorted, with CC-001.. cost centers."""
    codes = {tag for tag in tags if is_valid_equipment_code(tag)}
    codes.add(GENERIC_EQUIPMENT)

    entries = []
    for index, code in enumerate(sorted(codes), start=1):
        if code == GENERIC_EQUIPMENT:
            category = GENERIC_CATEGORY
        else:
            category = extract_equipment_category(code)
        entries.append(
            EquipmentEntry(
                code=code,
                display_name=code,
                category=category,
                description=_describe(code, category),
                cost_center=f"CC-{index:03d}",
                owner=DEFAULT_OWNER,
                contact_email=DEFAULT_CONTACT_EMAIL,
                active=True,
            )
        )
    return entries


def catalog_document(entries: List[EquipmentEntry]) -> dict:
    """JSON document for equipamentos.json (validated before returning)."""
    rows = [entry.to_json() for entry in entries]
    EquipmentCatalogSchema.validate(pd.DataFrame(rows))
    return {"equipamentos": rows}


def category_counts(entries: Iterable[EquipmentEntry]) -> Dict[str, int]:
    """Equipment count per category, most common first."""
    counts = Counter(entry.category for entry in entries)
    return dict(counts.most_common())


def build_class_catalog(codes: Iterable[str]) -> dict:
    """
    JSON document for classes.json.

    Lists every mapped accounting class plus any unmapped code seen in the
    data (those fall in the fallback group).
    """
    all_codes = sorted(set(ACCOUNTING_CLASSES) | set(codes))
    classes = []
    for code in all_codes:
        mapped = map_accounting_class(code)
        classes.append({
            "codigo": code,
            "classe": mapped.group,
            "subclasse": mapped.subgroup,
            "centro_custo": cost_center_for_class(code),
        })
    return {"classes_orcamentarias": classes}
