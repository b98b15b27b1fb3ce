"""
Result Table construction and CSV export.
"""

from pathlib import Path
from typing import Iterable, Union

import pandas as pd

# Result Table columns, in export order. Maps column name -> JobRecord attribute.
RESULT_COLUMN_MAP = {
    "title": "title",
    "description": "description",
    "jobType": "job_type",
    "employer": "employer",
    "location": "location",
    "retrievedAt": "retrieved_at",
}
RESULT_COLUMNS = list(RESULT_COLUMN_MAP.keys())


def build_result_table(records: Iterable, include_url: bool = False) -> pd.DataFrame:
    """
    Concatenate JobRecords into the Result Table, keeping their order.

    Always returns the fixed column set, even when there are no records.
    """
    columns = RESULT_COLUMNS + (["url"] if include_url else [])
    rows = [record.to_row(include_url=include_url) for record in records]
    return pd.DataFrame(rows, columns=columns)


def write_result_table(df: pd.DataFrame, output_path: Union[str, Path]) -> Path:
    """
    Write the Result Table as CSV with a header row.

    Absent fields become empty cells and timestamps are written in ISO-8601.

    Args:
        df: Result Table from build_result_table()
        output_path: Destination file; parent directories are created

    Returns:
        The path written to
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    export_df = df.copy()
    if "retrievedAt" in export_df.columns:
        export_df["retrievedAt"] = export_df["retrievedAt"].map(
            lambda ts: ts.isoformat() if ts is not None and not pd.isna(ts) else ""
        )

    export_df.to_csv(output_path, index=False, encoding="utf-8")
    return output_path
