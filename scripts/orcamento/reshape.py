"""
Reshaping engine: accounting exports -> long-format budget records.

Every source format is described by a ReshapeRule (delimiter, quoting,
fixed column offsets, year bindings). A single engine walks the lines of
any of them:

    Wide formats  (one row per class, one column per month):
        each YearColumns binding emits one record per non-zero month.
    Ledger formats (one row per posting):
        the row is filtered by fiscal year, its month is taken from a month
        name or a date column, and it emits one record if the amount is
        non-zero. Itemized ledgers also emit a DetailRecord when the
        equipment tag has a known category.

Rows that fail a structural check are skipped whole and counted in
ReshapeStats under a reason key; no partial record is emitted.
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Tuple

from config.mappings import GENERIC_EQUIPMENT, MONTHS
from orcamento.classifiers import (
    cost_center_for_class,
    extract_equipment_category,
    extract_equipment_tag,
    map_accounting_class,
    map_month_name,
    month_from_date,
    year_from_date,
)
from orcamento.models import BudgetRecord, DetailRecord
from orcamento.parsing import parse_numero, split_line, strip_bom, try_parse_numero, try_parse_valor

# How a rule resolves the equipment of a row
EQUIPMENT_FIXED = "fixed"   # always the generic bucket
EQUIPMENT_RAW = "raw"       # column value as-is, blank -> generic bucket
EQUIPMENT_TAG = "tag"       # leading TAG-NUMBER of a free-text column

# Skip reasons reported in ReshapeStats.skipped
SKIP_SHORT = "short_row"
SKIP_EMPTY_KEY = "empty_key"
SKIP_MARKER = "non_data_marker"
SKIP_BAD_YEAR = "unparseable_year"
SKIP_OTHER_YEAR = "other_year"
SKIP_NO_MONTH = "unknown_month"
SKIP_ZERO = "zero_amount"


@dataclass(frozen=True)
class YearColumns:
    """Twelve month column offsets (Jan..Dez) holding one year's values."""
    year: int
    month_columns: Tuple[int, ...]

    def __post_init__(self):
        if len(self.month_columns) != len(MONTHS):
            raise ValueError(f"YearColumns({self.year}) needs 12 month columns, got {len(self.month_columns)}")

    @classmethod
    def contiguous(cls, year: int, first_column: int) -> "YearColumns":
        return cls(year, tuple(range(first_column, first_column + len(MONTHS))))


@dataclass(frozen=True)
class DetailColumns:
    """Column offsets of the item fields in an itemized ledger."""
    product: int
    quantity: int
    unit_value: int
    total_value: int
    supplier: int


@dataclass(frozen=True)
class ReshapeRule:
    """Data description of one source export layout."""
    name: str
    delimiter: str
    quoted: bool
    min_columns: int
    class_code_col: int
    description_col: Optional[int] = None
    equipment_col: Optional[int] = None
    equipment_mode: str = EQUIPMENT_FIXED
    # Category given to generic-bucket records (None leaves it empty)
    generic_category: Optional[str] = None
    skip_descriptions: FrozenSet[str] = frozenset()
    has_header: bool = True

    # Wide layouts
    year_columns: Tuple[YearColumns, ...] = ()

    # Ledger layouts
    year_col: Optional[int] = None
    month_col: Optional[int] = None
    date_col: Optional[int] = None
    amount_col: Optional[int] = None
    cost_center_col: Optional[int] = None
    details: Optional[DetailColumns] = None

    def __post_init__(self):
        if self.equipment_mode not in (EQUIPMENT_FIXED, EQUIPMENT_RAW, EQUIPMENT_TAG):
            raise ValueError(f"{self.name}: unknown equipment mode {self.equipment_mode!r}")
        if self.equipment_mode != EQUIPMENT_FIXED and self.equipment_col is None:
            raise ValueError(f"{self.name}: equipment mode {self.equipment_mode!r} needs equipment_col")
        if not self.is_wide:
            if self.amount_col is None:
                raise ValueError(f"{self.name}: ledger rules need amount_col")
            if self.month_col is None and self.date_col is None:
                raise ValueError(f"{self.name}: ledger rules need month_col or date_col")
            if self.year_col is None and self.date_col is None:
                raise ValueError(f"{self.name}: ledger rules need year_col or date_col")

    @property
    def is_wide(self) -> bool:
        return bool(self.year_columns)


@dataclass
class ReshapeStats:
    """Counts for one reshaping run (returned instead of printed)."""
    lines_read: int = 0
    rows_kept: int = 0
    records_emitted: int = 0
    details_emitted: int = 0
    invalid_values: int = 0
    skipped: Counter = field(default_factory=Counter)

    @property
    def rows_skipped(self) -> int:
        return sum(self.skipped.values())

    def skip(self, reason: str) -> None:
        self.skipped[reason] += 1


@dataclass
class ReshapeResult:
    records: List[BudgetRecord] = field(default_factory=list)
    details: List[DetailRecord] = field(default_factory=list)
    stats: ReshapeStats = field(default_factory=ReshapeStats)


def _cell(cells: List[str], index: Optional[int]) -> str:
    if index is None or index >= len(cells):
        return ""
    return cells[index].strip()


def _resolve_equipment(cells: List[str], rule: ReshapeRule) -> Tuple[str, Optional[str]]:
    """Equipment tag and its category for one row."""
    if rule.equipment_mode == EQUIPMENT_RAW:
        tag = _cell(cells, rule.equipment_col) or GENERIC_EQUIPMENT
    elif rule.equipment_mode == EQUIPMENT_TAG:
        tag = extract_equipment_tag(_cell(cells, rule.equipment_col))
    else:
        tag = GENERIC_EQUIPMENT

    category = extract_equipment_category(tag)
    if category is None and tag == GENERIC_EQUIPMENT:
        category = rule.generic_category
    return tag, category


def _row_year(cells: List[str], rule: ReshapeRule) -> Optional[int]:
    if rule.year_col is not None:
        try:
            return int(_cell(cells, rule.year_col))
        except ValueError:
            return None
    return year_from_date(_cell(cells, rule.date_col))


def _row_month(cells: List[str], rule: ReshapeRule) -> Optional[str]:
    if rule.month_col is not None:
        month = map_month_name(_cell(cells, rule.month_col))
    else:
        month = month_from_date(_cell(cells, rule.date_col))
    return month if month in MONTHS else None


def _reshape_wide_row(cells, rule, base, result, target_year) -> bool:
    emitted = False
    for binding in rule.year_columns:
        if target_year is not None and binding.year != target_year:
            continue
        for month, column in zip(MONTHS, binding.month_columns):
            value = try_parse_valor(_cell(cells, column))
            if value is None:
                result.stats.invalid_values += 1
                continue
            if value > 0:
                result.records.append(BudgetRecord(year=binding.year, month=month, amount=value, **base))
                emitted = True
    if not emitted:
        result.stats.skip(SKIP_ZERO)
    return emitted


def _reshape_ledger_row(cells, rule, base, result, target_year) -> bool:
    year = _row_year(cells, rule)
    if year is None:
        result.stats.skip(SKIP_BAD_YEAR)
        return False
    if target_year is not None and year != target_year:
        result.stats.skip(SKIP_OTHER_YEAR)
        return False

    month = _row_month(cells, rule)
    if month is None:
        result.stats.skip(SKIP_NO_MONTH)
        return False

    amount = try_parse_valor(_cell(cells, rule.amount_col))
    if amount is None:
        result.stats.invalid_values += 1
        amount = 0.0
    if amount == 0:
        result.stats.skip(SKIP_ZERO)
        return False

    cost_center = _cell(cells, rule.cost_center_col) or base["cost_center"]
    result.records.append(
        BudgetRecord(year=year, month=month, amount=amount, **dict(base, cost_center=cost_center))
    )

    if rule.details is not None and extract_equipment_category(base["equipment_tag"]) is not None:
        result.details.append(_detail_record(cells, rule, base["equipment_tag"], result.stats))
    return True


def _detail_record(cells, rule, tag, stats) -> DetailRecord:
    columns = rule.details
    quantity_token = _cell(cells, columns.quantity)
    unit_token = _cell(cells, columns.unit_value)
    total_token = _cell(cells, columns.total_value)

    tokens = [quantity_token, unit_token]
    if columns.total_value != rule.amount_col:
        tokens.append(total_token)
    for token in tokens:
        if try_parse_numero(token) is None:
            stats.invalid_values += 1

    unit_value = try_parse_valor(unit_token) or 0.0
    total_value = try_parse_valor(total_token) or 0.0
    stats.details_emitted += 1
    return DetailRecord(
        date=_cell(cells, rule.date_col),
        equipment_tag=tag,
        product=_cell(cells, columns.product),
        quantity=parse_numero(quantity_token),
        unit_value=unit_value,
        total_value=total_value,
        supplier=_cell(cells, columns.supplier),
    )


def reshape_lines(lines: Iterable[str], rule: ReshapeRule, target_year: Optional[int] = None) -> ReshapeResult:
    """
    Reshape the raw lines of one export according to rule.

    Args:
        lines: raw text lines, header included when rule.has_header
        rule: layout of the export
        target_year: keep only this fiscal year (None keeps every year)
    """
    result = ReshapeResult()
    stats = result.stats

    for index, raw_line in enumerate(lines):
        if index == 0 and rule.has_header:
            continue
        line = raw_line.strip()
        if not line:
            continue
        stats.lines_read += 1

        cells = split_line(line, rule.delimiter, rule.quoted)
        if len(cells) < rule.min_columns:
            stats.skip(SKIP_SHORT)
            continue

        class_code = strip_bom(cells[rule.class_code_col]).strip()
        if not class_code:
            stats.skip(SKIP_EMPTY_KEY)
            continue

        description = _cell(cells, rule.description_col)
        if description in rule.skip_descriptions:
            stats.skip(SKIP_MARKER)
            continue

        accounting_class = map_accounting_class(class_code, description)
        tag, category = _resolve_equipment(cells, rule)
        base = {
            "class_code": class_code,
            "class_group": accounting_class.group,
            "class_subgroup": accounting_class.subgroup,
            "equipment_tag": tag,
            "equipment_category": category,
            "cost_center": cost_center_for_class(class_code),
        }

        records_before = len(result.records)
        if rule.is_wide:
            kept = _reshape_wide_row(cells, rule, base, result, target_year)
        else:
            kept = _reshape_ledger_row(cells, rule, base, result, target_year)
        if kept:
            stats.rows_kept += 1
            stats.records_emitted += len(result.records) - records_before

    return result


def load_lines(path: Path, encoding: str = "utf-8") -> List[str]:
    """Read a whole export into memory. Missing files raise FileNotFoundError."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")
    return path.read_text(encoding=encoding).split("\n")


def reshape_file(path: Path, rule: ReshapeRule, target_year: Optional[int] = None,
                 encoding: str = "utf-8") -> ReshapeResult:
    return reshape_lines(load_lines(path, encoding), rule, target_year)
