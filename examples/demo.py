"""dbox-core -- Quick demo.

Run: python examples/demo.py
"""

import tempfile
from pathlib import Path

# Resolve example file paths
examples_dir = Path(__file__).parent
dbox_file = str(examples_dir / "expensoids.dbox")

PSQL_TEXT = """\
 id |    date    |   type    |  amount
----+------------+-----------+-----------
 11 | 2010-09-01 | factory   | 146035.00
 16 | 2010-09-01 | marketing | 467087.00
(2 rows)
"""


def main():
    from dbox_core import BoxFormat, parse_dbox, parse_simple, write_csv

    # 1. Parse a mysql table saved to a file
    print("=" * 60)
    print("1. PARSE A MYSQL DBOX FILE")
    print("=" * 60)
    dbx = BoxFormat()
    table = dbx.read_dbox(input_file=dbox_file)
    print(f"  Dialect: {table.dialect.value}")
    print(f"  Header: {table.header}")
    print(f"  Boundaries: {table.boundaries}")
    for row in table.rows:
        print(f"  {row}")
    print()

    # 2. Parse psql output from a string
    print("=" * 60)
    print("2. PARSE PSQL OUTPUT")
    print("=" * 60)
    psql = parse_dbox(PSQL_TEXT)
    print(f"  Dialect: {psql.dialect.value}, rows: {psql.row_count}")
    print(f"  Same values as mysql? {psql.rows[0] == table.rows[0]}")
    print(f"  Fallback strategy agrees? {parse_simple(PSQL_TEXT).data == psql.data}")
    print()

    # 3. Export
    print("=" * 60)
    print("3. EXPORT")
    print("=" * 60)
    out_dir = Path(tempfile.mkdtemp())
    dbx.output_to_tsv(str(out_dir / "expensoids.tsv"))
    result = write_csv(table, out_dir / "expensoids.csv")
    print(f"  TSV: {out_dir / 'expensoids.tsv'}")
    print(f"  CSV: {result['saved_to']} ({result['rows']} rows)")
    print()

    # 4. DataFrame
    print("=" * 60)
    print("4. PANDAS")
    print("=" * 60)
    df = table.to_dataframe()
    df["amount"] = df["amount"].astype(float)
    print(df.groupby("type")["amount"].sum().to_string())


if __name__ == "__main__":
    main()
