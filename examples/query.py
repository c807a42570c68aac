"""Query a scan report - zero-price BinArrays grouped by LbPair."""
from __future__ import annotations

import sys
from pathlib import Path

import duckdb


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python query.py <report_out_dir> [lb_pair]")
        print("Example: python query.py out/ EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v")
        sys.exit(1)

    out = Path(sys.argv[1])
    lb_pair = sys.argv[2] if len(sys.argv) > 2 else None

    con = duckdb.connect(":memory:")
    con.execute(f"CREATE VIEW zero_price AS SELECT * FROM '{out}/report/zero_price.parquet'")

    where = "WHERE lb_pair = ?" if lb_pair else ""
    params = [lb_pair] if lb_pair else []

    sql = f"""
    SELECT
        lb_pair,
        COUNT(*) AS bin_arrays,
        MIN("index") AS min_index,
        MAX("index") AS max_index,
        LIST(address ORDER BY "index") AS addresses
    FROM zero_price
    {where}
    GROUP BY lb_pair
    ORDER BY bin_arrays DESC
    """

    print("--- Zero-price BinArrays by LbPair ---\n")

    df = con.execute(sql, params).fetchdf()
    if df.empty:
        print("No zero-price BinArrays in report.")
    else:
        for _, row in df.iterrows():
            print(f"LB PAIR: {row['lb_pair']}")
            print(f"  BinArrays: {row['bin_arrays']} (index {row['min_index']}..{row['max_index']})")
            for addr in row["addresses"]:
                print(f"  - {addr}")
            print()


if __name__ == "__main__":
    main()
