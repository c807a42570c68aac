from __future__ import annotations

from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

ZERO_PRICE_SCHEMA = pa.schema(
    [
        ("address", pa.string()),
        ("lb_pair", pa.string()),
        ("index", pa.int64()),
        ("version", pa.int32()),
        ("bin", pa.int32()),
    ]
)

ERRORS_SCHEMA = pa.schema(
    [
        ("address", pa.string()),
        ("code", pa.string()),
        ("message", pa.string()),
    ]
)


def _write(rows: list[dict], schema: pa.Schema, path: Path) -> bool:
    df = pd.DataFrame(rows, columns=schema.names)
    if df.empty:
        return False
    table = pa.Table.from_pandas(df.sort_values("address"), schema=schema, preserve_index=False)
    pq.write_table(table, path)
    return True


def write_report(result: dict, out_path: Path) -> list[Path]:
    """Write report/zero_price.parquet and report/errors.parquet for a scan result.

    Empty tables are skipped. Returns the files written.
    """
    report_dir = Path(out_path) / "report"
    report_dir.mkdir(parents=True, exist_ok=True)

    written = []
    targets = [
        (result["zero_price_accounts"], ZERO_PRICE_SCHEMA, report_dir / "zero_price.parquet"),
        (result["errors"], ERRORS_SCHEMA, report_dir / "errors.parquet"),
    ]
    for rows, schema, path in targets:
        if _write(rows, schema, path):
            written.append(path)
    return written
