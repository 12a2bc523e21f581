"""Shared test fixtures for dbox-core.

The same three-row table rendered by each supported shell.
"""

import pytest


MYSQL_DBOX = """\
+-----+------------+-----------+-----------+
| id  | date       | type      | amount    |
+-----+------------+-----------+-----------+
|  11 | 2010-09-01 | factory   | 146035.00 |
|  15 | 2011-01-01 | factory   | 191239.00 |
|  16 | 2010-09-01 | marketing | 467087.00 |
+-----+------------+-----------+-----------+
"""

PSQL_DBOX = """\
 id |    date    |   type    |  amount
----+------------+-----------+-----------
 11 | 2010-09-01 | factory   | 146035.00
 15 | 2011-01-01 | factory   | 191239.00
 16 | 2010-09-01 | marketing | 467087.00
(3 rows)

"""

EXPECTED_HEADER = ["id", "date", "type", "amount"]

EXPECTED_ROWS = [
    ["11", "2010-09-01", "factory", "146035.00"],
    ["15", "2011-01-01", "factory", "191239.00"],
    ["16", "2010-09-01", "marketing", "467087.00"],
]


def _unicode_from_psql(text):
    """Redraw a psql ascii table with the box-drawing characters."""
    lines = text.split("\n")
    lines[1] = lines[1].replace("-", "\N{BOX DRAWINGS LIGHT HORIZONTAL}").replace(
        "+", "\N{BOX DRAWINGS LIGHT VERTICAL AND HORIZONTAL}"
    )
    return "\n".join(
        line if i == 1 else line.replace(" | ", " \N{BOX DRAWINGS LIGHT VERTICAL} ")
        for i, line in enumerate(lines)
    )


PSQL_UNICODE_DBOX = _unicode_from_psql(PSQL_DBOX)


def _sqlite_line(values):
    return "".join(v.ljust(12) for v in values).rstrip()


SQLITE_DBOX = "\n".join(
    [_sqlite_line(EXPECTED_HEADER), _sqlite_line(["-" * 10] * 4)]
    + [_sqlite_line(row) for row in EXPECTED_ROWS]
) + "\n"


@pytest.fixture
def mysql_text():
    return MYSQL_DBOX


@pytest.fixture
def psql_text():
    return PSQL_DBOX


@pytest.fixture
def psql_unicode_text():
    return PSQL_UNICODE_DBOX


@pytest.fixture
def sqlite_text():
    return SQLITE_DBOX


@pytest.fixture
def expected_header():
    return list(EXPECTED_HEADER)


@pytest.fixture
def expected_rows():
    return [list(row) for row in EXPECTED_ROWS]


@pytest.fixture
def mysql_file(tmp_path):
    """Write the mysql table to a .dbox file."""
    path = tmp_path / "expensoids.dbox"
    path.write_text(MYSQL_DBOX, encoding="utf-8")
    return str(path)


@pytest.fixture
def psql_file(tmp_path):
    path = tmp_path / "expensoids_psql.dbox"
    path.write_text(PSQL_DBOX, encoding="utf-8")
    return str(path)


@pytest.fixture
def unicode_file(tmp_path):
    path = tmp_path / "expensoids_unicode.dbox"
    path.write_text(PSQL_UNICODE_DBOX, encoding="utf-8")
    return str(path)
