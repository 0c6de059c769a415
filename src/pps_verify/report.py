from __future__ import annotations

from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

REPORT_FILE = "evidence/profile_scan.parquet"

REPORT_SCHEMA = pa.schema(
    [
        ("section", pa.string()),
        ("key", pa.string()),
        ("value", pa.string()),
        ("status", pa.string()),
        ("data_length", pa.int32()),
        ("checksum", pa.uint8()),
        ("detail", pa.string()),
    ]
)


def write_scan_report(rows: list[dict], out_path: Path) -> Path:
    """Write scan rows to ``evidence/profile_scan.parquet`` under ``out_path``.

    An empty scan still writes a zero-row table with the full schema.
    """
    (Path(out_path) / "evidence").mkdir(parents=True, exist_ok=True)
    target = Path(out_path) / REPORT_FILE

    df = pd.DataFrame(rows, columns=REPORT_SCHEMA.names)
    if df.empty:
        pq.write_table(REPORT_SCHEMA.empty_table(), target)
        return target

    # Malformed entries have no length or checksum.
    df["data_length"] = df["data_length"].astype("Int32")
    df["checksum"] = df["checksum"].astype("UInt8")

    table = pa.Table.from_pandas(df, schema=REPORT_SCHEMA, preserve_index=False)
    pq.write_table(table, target)
    return target
