#!/usr/bin/env python3
"""
Stage 1: Convert General Ledger Export

Turns the general-ledger export (one quoted CSV row per posting) into
actual (realizado) budget records for the target fiscal year. The
equipment is read from the leading tag of the posting history text.

Dependencies: None
Input: data/raw/razao contabil.csv
Output: data/intermediate/realizado_<ano>_razao.csv
"""

import argparse
import sys
from pathlib import Path

# Add scripts directory to path for config imports
SCRIPTS_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(SCRIPTS_DIR))

from config.layouts import GENERAL_LEDGER_RULE  # noqa: E402
from config.paths import RAW_GENERAL_LEDGER_FILE, TARGET_YEAR, intermediate_ledger_file  # noqa: E402
from orcamento.reporting import print_banner, print_reshape_stats  # noqa: E402
from orcamento.reshape import ReshapeStats, reshape_file  # noqa: E402
from orcamento.writers import write_budget_csv  # noqa: E402


def convert(input_file: Path, output_file: Path, year: int, allow_missing: bool = False) -> ReshapeStats:
    """Reshape the ledger for one fiscal year and write the intermediate CSV."""
    if allow_missing and not input_file.exists():
        print(f"  Warning: {input_file} not found, writing empty output")
        write_budget_csv([], output_file)
        return ReshapeStats()

    print(f"Loading data from: {input_file}")
    result = reshape_file(input_file, GENERAL_LEDGER_RULE, target_year=year)
    print_reshape_stats(result.stats)

    count = write_budget_csv(result.records, output_file)
    print(f"  Saved {count:,} records to: {output_file}")
    return result.stats


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert the general-ledger export")
    parser.add_argument("--input", type=Path, default=RAW_GENERAL_LEDGER_FILE, help="Ledger export (quoted CSV)")
    parser.add_argument("--output", type=Path, default=None, help="Output CSV (default: intermediate dir)")
    parser.add_argument("--year", type=int, default=TARGET_YEAR, help="Fiscal year to keep")
    parser.add_argument("--allow-missing", action="store_true",
                        help="Write an empty output instead of failing when the export is absent")
    return parser.parse_args(argv)


def main(argv=None) -> bool:
    args = parse_args(argv)
    output_file = args.output or intermediate_ledger_file(args.year)
    print_banner(f"Stage 1: Convert General Ledger ({args.year})")

    try:
        convert(args.input, output_file, args.year, args.allow_missing)
    except FileNotFoundError as exc:
        print(f"\nERROR: {exc}")
        return False

    print("\n" + "=" * 60)
    print("Stage 1 Complete: general ledger converted")
    print("=" * 60)
    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
