#!/usr/bin/env python3
"""
Stage 2: Generate Dashboard Metadata

Builds the equipment catalog from every equipment tag present in the
dashboard CSVs, the accounting-class catalog, and a default dashboard
config (only when none exists yet, so hand edits survive reruns).

Dependencies: stage2_prepare/05_combine_budgets.py must run first
Input: data/<ano>/orcado.csv, data/<ano>/realizado.csv
Output: data/metadata/equipamentos.json
        data/metadata/classes.json
        data/metadata/config.json (if absent)
"""

import argparse
import sys
from pathlib import Path

# Add scripts directory to path for config imports
SCRIPTS_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(SCRIPTS_DIR))

from config.paths import (  # noqa: E402
    CLASS_CATALOG_NAME,
    CURRENT_BUDGET_YEAR,
    DASHBOARD_CONFIG_NAME,
    DATA_DIR,
    EQUIPMENT_CATALOG_NAME,
    PREVIOUS_BUDGET_YEAR,
    PUBLIC_DATA_DIR,
    actual_file,
    budget_file,
)
from orcamento.catalog import (  # noqa: E402
    build_class_catalog,
    build_equipment_catalog,
    catalog_document,
    category_counts,
    collect_class_codes,
    collect_equipment_tags,
)
from orcamento.reporting import print_banner  # noqa: E402
from orcamento.settings import default_config_document  # noqa: E402
from orcamento.writers import mirror_file, write_json  # noqa: E402


def source_files(data_dir: Path) -> list:
    """Dashboard CSVs scanned for equipment tags and class codes."""
    return [
        budget_file(PREVIOUS_BUDGET_YEAR, data_dir),
        budget_file(CURRENT_BUDGET_YEAR, data_dir),
        actual_file(CURRENT_BUDGET_YEAR, data_dir),
    ]


def generate(data_dir: Path, public_dir: Path) -> dict:
    """Write the metadata files. Returns the equipment catalog document."""
    sources = source_files(data_dir)
    metadata_dir = data_dir / "metadata"

    print("\n[1/3] Building equipment catalog...")
    entries = build_equipment_catalog(collect_equipment_tags(sources))
    print(f"  {len(entries):,} equipment entries")
    print("  Equipment by category:")
    for category, count in category_counts(entries).items():
        print(f"    - {category}: {count}")
    equipment_doc = catalog_document(entries)
    written = [metadata_dir / EQUIPMENT_CATALOG_NAME]
    write_json(equipment_doc, written[-1])

    print("\n[2/3] Building accounting class catalog...")
    class_doc = build_class_catalog(collect_class_codes(sources))
    print(f"  {len(class_doc['classes_orcamentarias']):,} accounting classes")
    written.append(metadata_dir / CLASS_CATALOG_NAME)
    write_json(class_doc, written[-1])

    print("\n[3/3] Dashboard config...")
    config_file = metadata_dir / DASHBOARD_CONFIG_NAME
    if config_file.exists():
        print(f"  Keeping existing {config_file}")
    else:
        write_json(default_config_document(), config_file)
        print(f"  Wrote defaults to {config_file}")
    written.append(config_file)

    print("\nSaved:")
    for path in written:
        print(f"  {path}")
        print(f"  {mirror_file(path, data_dir, public_dir)}")
    return equipment_doc


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate dashboard metadata files")
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR)
    parser.add_argument("--public-dir", type=Path, default=PUBLIC_DATA_DIR)
    return parser.parse_args(argv)


def main(argv=None) -> bool:
    args = parse_args(argv)
    print_banner("Stage 2: Generate Dashboard Metadata")

    generate(args.data_dir, args.public_dir)

    print("\n" + "=" * 60)
    print("Stage 2 Complete: metadata generated")
    print("=" * 60)
    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
