"""Console report helpers shared by the pipeline scripts."""

from orcamento.reshape import ReshapeStats


def print_banner(title: str) -> None:
    print("=" * 60)
    print(title)
    print("=" * 60)


def print_reshape_stats(stats: ReshapeStats) -> None:
    """Print the counts of one reshaping run."""
    print(f"  Lines read:        {stats.lines_read:,}")
    print(f"  Rows kept:         {stats.rows_kept:,}")
    print(f"  Rows skipped:      {stats.rows_skipped:,}")
    for reason, count in sorted(stats.skipped.items()):
        print(f"    - {reason}: {count:,}")
    print(f"  Records emitted:   {stats.records_emitted:,}")
    if stats.details_emitted:
        print(f"  Detail lines:      {stats.details_emitted:,}")
    if stats.invalid_values:
        print(f"  Warning: {stats.invalid_values:,} unparseable values were treated as 0")
