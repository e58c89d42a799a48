#!/usr/bin/env python3
"""
Stage 1: Convert Equipment Budget Sheet

Reshapes the per-equipment budget sheet (one row per accounting class and
equipment, one column per month) into long-format budget records.

Dependencies: None (first script in pipeline)
Input: data/raw/Orçamento 2026 -Dashboard - csv.csv
Output: data/intermediate/orcado_2026_equipamentos.csv
"""

import argparse
import sys
from pathlib import Path

# Add scripts directory to path for config imports
SCRIPTS_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(SCRIPTS_DIR))

from config.layouts import EQUIPMENT_BUDGET_RULE  # noqa: E402
from config.paths import INTERMEDIATE_EQUIPMENT_BUDGET, RAW_EQUIPMENT_BUDGET_FILE  # noqa: E402
from orcamento.reporting import print_banner, print_reshape_stats  # noqa: E402
from orcamento.reshape import reshape_file  # noqa: E402
from orcamento.writers import write_budget_csv  # noqa: E402


def convert(input_file: Path, output_file: Path):
    """Reshape the sheet and write the intermediate CSV. Returns the stats."""
    print(f"Loading data from: {input_file}")
    result = reshape_file(input_file, EQUIPMENT_BUDGET_RULE)
    print_reshape_stats(result.stats)

    count = write_budget_csv(result.records, output_file)
    print(f"  Saved {count:,} records to: {output_file}")
    return result.stats


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert the equipment budget sheet")
    parser.add_argument("--input", type=Path, default=RAW_EQUIPMENT_BUDGET_FILE, help="Source sheet (CSV, ';')")
    parser.add_argument("--output", type=Path, default=INTERMEDIATE_EQUIPMENT_BUDGET, help="Output CSV")
    return parser.parse_args(argv)


def main(argv=None) -> bool:
    args = parse_args(argv)
    print_banner("Stage 1: Convert Equipment Budget Sheet")

    try:
        convert(args.input, args.output)
    except FileNotFoundError as exc:
        print(f"\nERROR: {exc}")
        return False

    print("\n" + "=" * 60)
    print("Stage 1 Complete: equipment budget converted")
    print("=" * 60)
    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
