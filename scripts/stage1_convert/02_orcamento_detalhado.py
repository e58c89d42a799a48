#!/usr/bin/env python3
"""
Stage 1: Convert Detailed Budget Sheet

The detailed sheet carries two budget years side by side (previous and
current). Each year is reshaped into its own long-format file; all lines
go to the generic equipment bucket.

Dependencies: None
Input: data/raw/orçamento detalhado 2026 - Dashboard - csv.csv
Output: data/intermediate/orcado_2025_detalhado.csv
        data/intermediate/orcado_2026_detalhado.csv
"""

import argparse
import sys
from pathlib import Path

# Add scripts directory to path for config imports
SCRIPTS_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(SCRIPTS_DIR))

from config.layouts import DETAILED_BUDGET_RULE  # noqa: E402
from config.paths import (  # noqa: E402
    CURRENT_BUDGET_YEAR,
    INTERMEDIATE_DETAILED_2025,
    INTERMEDIATE_DETAILED_2026,
    PREVIOUS_BUDGET_YEAR,
    RAW_DETAILED_BUDGET_FILE,
)
from orcamento.reporting import print_banner, print_reshape_stats  # noqa: E402
from orcamento.reshape import load_lines, reshape_lines  # noqa: E402
from orcamento.writers import write_budget_csv  # noqa: E402


def convert(input_file: Path, outputs: dict) -> dict:
    """
    Reshape the sheet once per budget year.

    Args:
        input_file: detailed budget sheet
        outputs: year -> output CSV path

    Returns:
        year -> ReshapeStats
    """
    print(f"Loading data from: {input_file}")
    lines = load_lines(input_file)
    print(f"  Loaded {len(lines):,} lines")

    all_stats = {}
    for year, output_file in outputs.items():
        print(f"\n  Budget year {year}:")
        result = reshape_lines(lines, DETAILED_BUDGET_RULE, target_year=year)
        print_reshape_stats(result.stats)
        count = write_budget_csv(result.records, output_file)
        print(f"  Saved {count:,} records to: {output_file}")
        all_stats[year] = result.stats
    return all_stats


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert the detailed budget sheet")
    parser.add_argument("--input", type=Path, default=RAW_DETAILED_BUDGET_FILE, help="Source sheet (CSV, ';')")
    parser.add_argument("--output-previous", type=Path, default=INTERMEDIATE_DETAILED_2025,
                        help=f"Output CSV for {PREVIOUS_BUDGET_YEAR}")
    parser.add_argument("--output-current", type=Path, default=INTERMEDIATE_DETAILED_2026,
                        help=f"Output CSV for {CURRENT_BUDGET_YEAR}")
    return parser.parse_args(argv)


def main(argv=None) -> bool:
    args = parse_args(argv)
    print_banner("Stage 1: Convert Detailed Budget Sheet")

    outputs = {
        PREVIOUS_BUDGET_YEAR: args.output_previous,
        CURRENT_BUDGET_YEAR: args.output_current,
    }
    try:
        convert(args.input, outputs)
    except FileNotFoundError as exc:
        print(f"\nERROR: {exc}")
        return False

    print("\n" + "=" * 60)
    print("Stage 1 Complete: detailed budget converted")
    print("=" * 60)
    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
