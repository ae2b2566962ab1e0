"""
Small helper to inspect Parquet output of a viewtime conversion.

The goal is to quickly verify that the written table has the expected
columns, that UTC times fall where the filename says, and how far the
per-pixel UTC drifts from the nominal capture time.
"""
import sys
from pathlib import Path

import pyarrow.parquet as pq

from ..config import OUTPUT_DIR


def inspect_parquet(path) -> dict | None:
    """
    Print basic information about one conversion result file.

    This shows the schema, number of rows, the UTC range and, when the
    nominal time was a full instant, UTC difference statistics.

    Returns:
        Summary dict, or None when the file does not exist
    """
    path = Path(path)
    print(f"\nInspecting {path}")

    if not path.exists():
        print("  Not found!")
        return None

    table = pq.read_table(path)
    print(f"  Schema: {table.schema}")
    print(f"  Rows: {table.num_rows}")
    print(f"  Columns: {table.column_names}")

    summary = {"rows": table.num_rows, "columns": table.column_names}

    df = table.to_pandas()
    if df.empty:
        print("  No rows in table.")
        return summary

    utc = df["utc_instant"]
    summary["utc_min"] = utc.min()
    summary["utc_max"] = utc.max()
    print(f"  UTC (min/max): {utc.min()} / {utc.max()}")

    if "utc_difference" in df:
        minutes = df["utc_difference"].dt.total_seconds() / 60
        summary["difference_minutes"] = (minutes.min(), minutes.mean(), minutes.max())
        print(
            "  UTC difference in minutes (min/mean/max): "
            f"{minutes.min():.0f}/{minutes.mean():.1f}/{minutes.max():.0f}"
        )

    if "local_civil_instant" in df:
        print(f"  Civil time zone: {df['local_civil_instant'].dt.tz}")

    return summary


def main(argv=None) -> None:
    """Inspect the given files, or every result file in the output directory."""
    paths = argv if argv is not None else sys.argv[1:]
    if not paths:
        paths = sorted(OUTPUT_DIR.glob("*_utc.parquet"))
    for path in paths:
        inspect_parquet(path)


if __name__ == "__main__":
    main()
