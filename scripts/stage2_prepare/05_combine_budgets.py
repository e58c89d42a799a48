#!/usr/bin/env python3
"""
Stage 2: Combine Budget Files

Merges the stage1 intermediate files into the per-year files the
dashboard fetches, and mirrors them under public/data/.

Dependencies: All stage1 scripts must run first
Input: data/intermediate/orcado_2025_detalhado.csv
       data/intermediate/orcado_2026_detalhado.csv
       data/intermediate/orcado_2026_equipamentos.csv
       data/intermediate/realizado_<ano>_razao.csv
       data/intermediate/realizado_<ano>_itens.csv
       data/intermediate/detalhes_<ano>.csv
Output: data/2025/orcado.csv
        data/2026/orcado.csv
        data/2026/realizado.csv
        data/2026/detalhes.csv
"""

import argparse
import sys
from pathlib import Path

# Add scripts directory to path for config imports
SCRIPTS_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(SCRIPTS_DIR))

import pandas as pd  # noqa: E402
from config.paths import (  # noqa: E402
    CURRENT_BUDGET_YEAR,
    DATA_DIR,
    INTERMEDIATE_DIR,
    PREVIOUS_BUDGET_YEAR,
    PUBLIC_DATA_DIR,
    TARGET_YEAR,
    actual_file,
    budget_file,
    details_file,
)
from orcamento.reporting import print_banner  # noqa: E402
from orcamento.writers import (  # noqa: E402
    mirror_file,
    read_budget_csv,
    read_detail_csv,
    write_budget_frame,
    write_detail_frame,
)


def load_parts(paths: list) -> pd.DataFrame:
    """Concatenate intermediate budget files in the given order."""
    frames = []
    for path in paths:
        if not path.exists():
            raise FileNotFoundError(f"Intermediate file not found: {path} (run stage 1 first)")
        df = read_budget_csv(path)
        print(f"  {path.name}: {len(df):,} rows")
        frames.append(df)
    return pd.concat(frames, ignore_index=True)


def combine(intermediate_dir: Path, data_dir: Path, public_dir: Path, year: int = TARGET_YEAR) -> dict:
    """
    Build every dashboard CSV. Returns output path -> row count.
    """
    plan = {
        budget_file(PREVIOUS_BUDGET_YEAR, data_dir): [
            intermediate_dir / f"orcado_{PREVIOUS_BUDGET_YEAR}_detalhado.csv",
        ],
        # Detailed lines first, then the per-equipment lines
        budget_file(CURRENT_BUDGET_YEAR, data_dir): [
            intermediate_dir / f"orcado_{CURRENT_BUDGET_YEAR}_detalhado.csv",
            intermediate_dir / f"orcado_{CURRENT_BUDGET_YEAR}_equipamentos.csv",
        ],
        actual_file(year, data_dir): [
            intermediate_dir / f"realizado_{year}_razao.csv",
            intermediate_dir / f"realizado_{year}_itens.csv",
        ],
    }

    counts = {}
    for output_file, parts in plan.items():
        print(f"\nBuilding {output_file.relative_to(data_dir)}...")
        df = load_parts(parts)
        counts[output_file] = write_budget_frame(df, output_file)
        print(f"  Saved {counts[output_file]:,} rows to: {output_file}")

    detail_source = intermediate_dir / f"detalhes_{year}.csv"
    if not detail_source.exists():
        raise FileNotFoundError(f"Intermediate file not found: {detail_source} (run stage 1 first)")
    detail_output = details_file(year, data_dir)
    print(f"\nBuilding {detail_output.relative_to(data_dir)}...")
    counts[detail_output] = write_detail_frame(read_detail_csv(detail_source), detail_output)
    print(f"  Saved {counts[detail_output]:,} rows to: {detail_output}")

    print("\nMirroring to public data...")
    for output_file in counts:
        target = mirror_file(output_file, data_dir, public_dir)
        print(f"  {target}")
    return counts


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Combine intermediate files into dashboard files")
    parser.add_argument("--intermediate-dir", type=Path, default=INTERMEDIATE_DIR)
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR)
    parser.add_argument("--public-dir", type=Path, default=PUBLIC_DATA_DIR)
    parser.add_argument("--year", type=int, default=TARGET_YEAR, help="Fiscal year of the actuals")
    return parser.parse_args(argv)


def main(argv=None) -> bool:
    args = parse_args(argv)
    print_banner("Stage 2: Combine Budget Files")

    try:
        combine(args.intermediate_dir, args.data_dir, args.public_dir, args.year)
    except FileNotFoundError as exc:
        print(f"\nERROR: {exc}")
        return False

    print("\n" + "=" * 60)
    print("Stage 2 Complete: dashboard files written")
    print("=" * 60)
    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
