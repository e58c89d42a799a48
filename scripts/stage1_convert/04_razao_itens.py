#!/usr/bin/env python3
"""
Stage 1: Convert Itemized Ledger Export

Turns the itemized ledger (one quoted CSV row per purchased item) into
actual budget records and, for items booked to a known equipment, into
detail records (date, product, quantity, values, supplier). Generic items
stay out of the detail file.

Dependencies: None
Input: data/raw/razao por item.csv
Output: data/intermediate/realizado_<ano>_itens.csv
        data/intermediate/detalhes_<ano>.csv
"""

import argparse
import sys
from pathlib import Path

# Add scripts directory to path for config imports
SCRIPTS_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(SCRIPTS_DIR))

from config.layouts import ITEMIZED_LEDGER_RULE  # noqa: E402
from config.paths import (  # noqa: E402
    RAW_ITEMIZED_LEDGER_FILE,
    TARGET_YEAR,
    intermediate_details_file,
    intermediate_itemized_file,
)
from orcamento.reporting import print_banner, print_reshape_stats  # noqa: E402
from orcamento.reshape import ReshapeStats, reshape_file  # noqa: E402
from orcamento.writers import write_budget_csv, write_detail_csv  # noqa: E402


def convert(input_file: Path, records_file: Path, details_file: Path, year: int,
            allow_missing: bool = False) -> ReshapeStats:
    """Reshape the itemized ledger and write both intermediate files."""
    if allow_missing and not input_file.exists():
        print(f"  Warning: {input_file} not found, writing empty outputs")
        write_budget_csv([], records_file)
        write_detail_csv([], details_file)
        return ReshapeStats()

    print(f"Loading data from: {input_file}")
    result = reshape_file(input_file, ITEMIZED_LEDGER_RULE, target_year=year)
    print_reshape_stats(result.stats)

    count = write_budget_csv(result.records, records_file)
    print(f"  Saved {count:,} records to: {records_file}")
    count = write_detail_csv(result.details, details_file)
    print(f"  Saved {count:,} detail lines to: {details_file}")
    return result.stats


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert the itemized ledger export")
    parser.add_argument("--input", type=Path, default=RAW_ITEMIZED_LEDGER_FILE, help="Itemized export (quoted CSV)")
    parser.add_argument("--output", type=Path, default=None, help="Output records CSV")
    parser.add_argument("--details", type=Path, default=None, help="Output detail CSV")
    parser.add_argument("--year", type=int, default=TARGET_YEAR, help="Fiscal year to keep")
    parser.add_argument("--allow-missing", action="store_true",
                        help="Write empty outputs instead of failing when the export is absent")
    return parser.parse_args(argv)


def main(argv=None) -> bool:
    args = parse_args(argv)
    records_file = args.output or intermediate_itemized_file(args.year)
    details_file = args.details or intermediate_details_file(args.year)
    print_banner(f"Stage 1: Convert Itemized Ledger ({args.year})")

    try:
        convert(args.input, records_file, details_file, args.year, args.allow_missing)
    except FileNotFoundError as exc:
        print(f"\nERROR: {exc}")
        return False

    print("\n" + "=" * 60)
    print("Stage 1 Complete: itemized ledger converted")
    print("=" * 60)
    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
