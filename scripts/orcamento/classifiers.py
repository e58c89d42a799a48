"""
Code classifiers: equipment tags, accounting classes and month names.

All lookups go through the static tables in config.mappings.
"""

import re
from datetime import datetime
from typing import Optional

from config.mappings import (
    ACCOUNTING_CLASSES,
    EQUIPMENT_CATEGORIES,
    FALLBACK_CLASS_GROUP,
    FALLBACK_CLASS_SUBGROUP,
    GENERIC_EQUIPMENT,
    MONTH_NAMES,
    MONTHS,
)
from orcamento.models import AccountingClass

EQUIPMENT_CODE_RE = re.compile(r"^([A-Z]+)-(\d+)$")
LEADING_TAG_RE = re.compile(r"^([A-Z]+)-(\d+)")

DATE_FORMATS = ("%d/%m/%Y", "%Y-%m-%d", "%d/%m/%y")


def extract_equipment_category(code: Optional[str]) -> Optional[str]:
    """Category for the prefix before the first '-', or None."""
    if not code:
        return None
    prefix = code.split("-", 1)[0]
    return EQUIPMENT_CATEGORIES.get(prefix)


def is_valid_equipment_code(code: Optional[str]) -> bool:
    """True for TAG-NUMBER codes whose TAG is a known category prefix."""
    if not code:
        return False
    match = EQUIPMENT_CODE_RE.match(code)
    if not match:
        return False
    return match.group(1) in EQUIPMENT_CATEGORIES


def extract_equipment_tag(free_text: Optional[str]) -> str:
    """
    Pull an equipment tag from the start of a description field.

    "EH-12 troca de mangueira" -> "EH-12". Anything without a leading
    known TAG-NUMBER goes to the generic bucket.
    """
    if not free_text:
        return GENERIC_EQUIPMENT
    text = free_text.replace('"', "").strip()
    match = LEADING_TAG_RE.match(text)
    if match and match.group(1) in EQUIPMENT_CATEGORIES:
        return match.group(0)
    return GENERIC_EQUIPMENT


def map_accounting_class(code: Optional[str], fallback_description: Optional[str] = None) -> AccountingClass:
    """Group and subgroup for a 6-digit accounting class."""
    mapped = ACCOUNTING_CLASSES.get((code or "").strip())
    if mapped:
        return AccountingClass(*mapped)
    return AccountingClass(FALLBACK_CLASS_GROUP, fallback_description or FALLBACK_CLASS_SUBGROUP)


def map_month_name(name: Optional[str]) -> Optional[str]:
    """Full Portuguese month name -> 3-letter abbreviation (unknown passes through)."""
    if name is None:
        return None
    return MONTH_NAMES.get(name.strip().lower(), name)


def parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def month_from_date(value: Optional[str]) -> Optional[str]:
    """Month abbreviation from a 'dd/mm/yyyy' or 'yyyy-mm-dd' date."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return MONTHS[parsed.month - 1]


def year_from_date(value: Optional[str]) -> Optional[int]:
    parsed = parse_date(value)
    return parsed.year if parsed else None


def cost_center_for_class(code: str) -> str:
    """Budget lines are grouped by the first three digits of their class."""
    return f"CC-{code[:3]}"
