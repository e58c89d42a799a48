#!/usr/bin/env python3
"""
Data Pipeline Orchestrator

Runs all conversion scripts in the correct order to produce the files
the budget dashboard reads.

Usage:
    python3 scripts/pipeline.py           # Run full pipeline
    python3 scripts/pipeline.py --stage1  # Run only stage 1

Pipeline Stages:
    Stage 1 (Convert): Raw exports → Intermediate (long format)
    Stage 2 (Prepare): Intermediate → Dashboard files + metadata

Output:
    data/2025/orcado.csv, data/2026/orcado.csv
    data/2026/realizado.csv, data/2026/detalhes.csv
    data/metadata/equipamentos.json, classes.json, config.json
    (mirrored under public/data/)
"""

import subprocess
import sys
import argparse
from pathlib import Path
from datetime import datetime

# Paths
SCRIPTS_DIR = Path(__file__).parent
sys.path.insert(0, str(SCRIPTS_DIR))

from config.paths import DATA_DIR, PROJECT_ROOT, ensure_directories, print_config  # noqa: E402

# Pipeline definition: (script_path, description, extra args)
# Ledger exports are not always delivered; their stages write empty files.
STAGE1_SCRIPTS = [
    ("stage1_convert/01_orcamento_equipamentos.py", "Convert Equipment Budget Sheet", []),
    ("stage1_convert/02_orcamento_detalhado.py", "Convert Detailed Budget Sheet", []),
    ("stage1_convert/03_razao_contabil.py", "Convert General Ledger", ["--allow-missing"]),
    ("stage1_convert/04_razao_itens.py", "Convert Itemized Ledger", ["--allow-missing"]),
]

STAGE2_SCRIPTS = [
    ("stage2_prepare/05_combine_budgets.py", "Combine Budget Files", []),
    ("stage2_prepare/06_generate_metadata.py", "Generate Dashboard Metadata", []),
]


def run_script(script_path: Path, description: str, extra_args: list) -> bool:
    """Run a Python script and return success status."""
    print(f"\n{'='*60}")
    print(f"Running: {description}")
    print(f"Script:  {script_path}")
    print("="*60)

    try:
        subprocess.run(
            [sys.executable, str(script_path), *extra_args],
            cwd=PROJECT_ROOT,
            check=True
        )
        return True
    except subprocess.CalledProcessError as e:
        print(f"\nERROR: Script failed with exit code {e.returncode}")
        return False


def run_stage(stage_name: str, scripts: list) -> bool:
    """Run all scripts in a stage."""
    print(f"\n{'#'*60}")
    print(f"# {stage_name}")
    print(f"{'#'*60}")

    for script_rel_path, description, extra_args in scripts:
        script_path = SCRIPTS_DIR / script_rel_path
        if not script_path.exists():
            print(f"ERROR: Script not found: {script_path}")
            return False

        if not run_script(script_path, description, extra_args):
            return False

    return True


def run_pipeline(max_stage: int = 2) -> bool:
    """Run the pipeline up to the specified stage."""
    start_time = datetime.now()

    print("\n" + "="*60)
    print(" BUDGET DATA PIPELINE")
    print(" Started at:", start_time.strftime("%Y-%m-%d %H:%M:%S"))
    print("="*60)

    print_config()
    ensure_directories()

    stages = [
        ("STAGE 1: CONVERT", STAGE1_SCRIPTS),
        ("STAGE 2: PREPARE", STAGE2_SCRIPTS),
    ]

    for i, (stage_name, scripts) in enumerate(stages, 1):
        if i > max_stage:
            break

        if not run_stage(stage_name, scripts):
            print(f"\n{'!'*60}")
            print(f"! PIPELINE FAILED at {stage_name}")
            print(f"{'!'*60}")
            return False

    end_time = datetime.now()
    duration = end_time - start_time

    print("\n" + "="*60)
    print(" PIPELINE COMPLETE")
    print(" Finished at:", end_time.strftime("%Y-%m-%d %H:%M:%S"))
    print(f" Duration: {duration.total_seconds():.1f} seconds")
    print("="*60)

    # Show output files
    print("\nOutput Files:")
    for pattern in ("[0-9]*/*.csv", "metadata/*.json"):
        for f in sorted(DATA_DIR.glob(pattern)):
            size = f.stat().st_size / 1024
            print(f"  {f.relative_to(DATA_DIR)}: {size:.1f} KB")

    return True


def main():
    parser = argparse.ArgumentParser(
        description="Run budget data pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python3 scripts/pipeline.py           # Run full pipeline
    python3 scripts/pipeline.py --stage1  # Run only stage 1 (convert)
        """
    )

    parser.add_argument("--stage1", action="store_true",
                        help="Run only stage 1 (convert)")

    args = parser.parse_args()

    max_stage = 1 if args.stage1 else 2

    success = run_pipeline(max_stage)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
