"""Tests for the ruler-based box-table parser."""

import logging

import pytest

from dbox_core import (
    BoxFormat,
    BoxPatterns,
    BoxTable,
    Dialect,
    MissingInputError,
    MissingRulerError,
    parse_dbox,
    parse_simple,
)
from dbox_core.parser import slice_fields, split_lines, trim_borders


class TestParseDbox:
    def test_postgres_scenario(self):
        text = (
            " id |    date    |   type    | amount\n"
            "----+------------+-----------+--------\n"
            "  1 | 2010-09-01 | factory   | 146035\n"
        )
        result = parse_dbox(text)
        assert result.dialect == Dialect.POSTGRES
        assert result.header == ["id", "date", "type", "amount"]
        assert result.rows == [["1", "2010-09-01", "factory", "146035"]]
        assert result.data[0] == result.header

    def test_mysql(self, mysql_text, expected_header, expected_rows):
        result = parse_dbox(mysql_text)
        assert result.dialect == Dialect.MYSQL
        assert result.header == expected_header
        assert result.rows == expected_rows
        assert result.boundaries == [5, 18, 30, 42]
        assert result.warnings == []

    def test_postgres(self, psql_text, expected_header, expected_rows):
        result = parse_dbox(psql_text)
        assert result.dialect == Dialect.POSTGRES
        assert result.header == expected_header
        assert result.rows == expected_rows

    def test_postgres_unicode(self, psql_unicode_text, expected_header, expected_rows):
        result = parse_dbox(psql_unicode_text)
        assert result.dialect == Dialect.POSTGRES_UNICODE
        assert result.header == expected_header
        assert result.rows == expected_rows

    def test_sqlite(self, sqlite_text, expected_header, expected_rows):
        result = parse_dbox(sqlite_text)
        assert result.dialect == Dialect.SQLITE
        assert result.header == expected_header
        assert result.rows == expected_rows

    def test_all_dialects_agree(self, mysql_text, psql_text, psql_unicode_text, sqlite_text):
        matrices = [parse_dbox(t).data for t in (mysql_text, psql_text, psql_unicode_text, sqlite_text)]
        assert all(m == matrices[0] for m in matrices)

    def test_rows_are_rectangular(self, mysql_text, psql_text, sqlite_text):
        for text in (mysql_text, psql_text, sqlite_text):
            result = parse_dbox(text)
            assert result.is_rectangular()
            assert all(len(row) == len(result.boundaries) for row in result.data)

    def test_idempotent(self, mysql_text):
        assert parse_dbox(mysql_text) == parse_dbox(mysql_text)

    def test_values_are_stripped(self, mysql_text):
        result = parse_dbox(mysql_text)
        assert result.rows[0][3] == "146035.00"
        assert result.rows[0][0] == "11"

    def test_embedded_delimiter_kept(self):
        text = (
            " id |  note\n"
            "----+-------\n"
            "  1 | a | b\n"
        )
        result = parse_dbox(text)
        assert result.rows == [["1", "a | b"]]

    def test_short_row_gives_empty_fields(self):
        text = (
            " id |  name  | city\n"
            "----+--------+------\n"
            "  1 | ann\n"
        )
        result = parse_dbox(text)
        assert result.rows == [["1", "ann", ""]]
        assert result.is_rectangular()

    def test_empty_values(self, mysql_text):
        text = mysql_text.replace("| factory   | 191239.00 |", "|           | 191239.00 |")
        result = parse_dbox(text)
        assert result.rows[1] == ["15", "2011-01-01", "", "191239.00"]

    def test_adjacent_crosses(self):
        text = "abc  def\n---++---\n123  456\n"
        result = parse_dbox(text)
        assert result.boundaries == [4, 8]
        assert result.data == [["abc", "def"], ["123", "456"]]

    def test_header_only(self):
        result = parse_dbox(" a | b\n---+---\n")
        assert result.header == ["a", "b"]
        assert result.rows == []
        assert result.row_count == 0

    def test_mysql_empty_table(self):
        text = "+---+---+\n| a | b |\n+---+---+\n+---+---+\n"
        result = parse_dbox(text)
        assert result.header == ["a", "b"]
        assert result.rows == []

    def test_mysql_footer(self, mysql_text, expected_rows):
        result = parse_dbox(mysql_text + "3 rows in set (0.00 sec)\n\n")
        assert result.rows == expected_rows

    def test_crlf(self, psql_text, expected_rows):
        result = parse_dbox(psql_text.replace("\n", "\r\n"))
        assert result.rows == expected_rows

    def test_leading_blank_lines(self, psql_text, expected_rows):
        result = parse_dbox("\n\n" + psql_text)
        assert result.rows == expected_rows

    def test_indented_mysql(self, mysql_text, expected_header, expected_rows):
        text = "\n".join("    " + line if line else line for line in mysql_text.split("\n"))
        result = parse_dbox(text)
        assert result.dialect == Dialect.MYSQL
        assert result.header == expected_header
        assert result.rows == expected_rows
        assert result.warnings == []

    def test_indented_postgres(self, psql_text, expected_rows):
        text = "\n".join("  " + line for line in psql_text.split("\n"))
        assert parse_dbox(text).rows == expected_rows

    def test_mysql_unterminated_ruler_degrades(self, caplog):
        text = (
            "+----+----\n"
            "| a  | b\n"
            "+----+----\n"
            "|  1 | 2\n"
            "+----+----\n"
        )
        with caplog.at_level(logging.WARNING):
            result = parse_dbox(text)
        assert result.data == [["a", "b"], ["1", "2"]]
        assert result.warnings
        assert "not terminated" in caplog.text

    def test_missing_ruler(self):
        with pytest.raises(MissingRulerError, match="no horizontal rule line"):
            parse_dbox(" a | b\n 1 | 2\n 3 | 4\n")

    def test_ruler_too_low(self):
        with pytest.raises(MissingRulerError):
            parse_dbox("x\ny\nz\n---+---\n")

    def test_missing_ruler_is_value_error(self):
        with pytest.raises(ValueError):
            parse_dbox("just one line")

    def test_empty_text(self):
        with pytest.raises(ValueError, match="No text content"):
            parse_dbox("  \n\n")

    def test_records(self, psql_text):
        records = parse_dbox(psql_text).records()
        assert records[0] == {"id": "11", "date": "2010-09-01", "type": "factory", "amount": "146035.00"}

    def test_result_is_frozen(self, psql_text):
        result = parse_dbox(psql_text)
        with pytest.raises(Exception):
            result.dialect = Dialect.MYSQL


class TestCustomPatterns:
    HEAVY = (
        " a ┃ b\n"
        "━━━╋━━━\n"
        " 1 ┃ 2\n"
    )

    def heavy_patterns(self):
        return BoxPatterns(
            cross=r"[+┼╋]",
            ruler_line=r"^(?=.*[-━╋])[-━╋\s]+$",
            separator=r"\s+[|│┃]\s+",
        )

    def test_heavy_box_drawing(self):
        result = parse_dbox(self.HEAVY, self.heavy_patterns())
        assert result.dialect == Dialect.POSTGRES
        assert result.boundaries == [3, 7]
        assert result.data == [["a", "b"], ["1", "2"]]

    def test_heavy_box_not_a_ruler_by_default(self):
        with pytest.raises(MissingRulerError):
            parse_dbox(self.HEAVY)

    def test_reader_uses_patterns(self):
        table = BoxFormat(patterns=self.heavy_patterns()).read_dbox(self.HEAVY)
        assert table.rows == [["1", "2"]]

    def test_simple_uses_separator(self):
        table = parse_simple(self.HEAVY, self.heavy_patterns())
        assert table.data == [["a", "b"], ["1", "2"]]


class TestHelpers:
    def test_split_lines_drops_footer_and_blanks(self):
        lines = split_lines("\n a | b\n---+---\n 1 | 2\n(1 row)\n\n")
        assert lines == [" a | b", "---+---", " 1 | 2"]

    def test_slice_fields(self):
        assert slice_fields("  1 | abc |  x", [4, 10, 14]) == ["1", "abc", "x"]

    def test_slice_fields_past_end(self):
        assert slice_fields("ab", [2, 5, 9]) == ["ab", "", ""]

    def test_trim_borders(self):
        assert trim_borders("|  11 | x |") == "  11 | x "
        assert trim_borders("  │ a │ b │  ") == " a │ b "


class TestBoxFormat:
    def test_read_text(self, psql_text, expected_header):
        dbx = BoxFormat()
        table = dbx.read_dbox(psql_text)
        assert isinstance(table, BoxTable)
        assert dbx.header == expected_header
        assert dbx.dialect == Dialect.POSTGRES
        assert dbx.last_result is table

    def test_read_file(self, mysql_file, expected_rows):
        dbx = BoxFormat()
        table = dbx.read_dbox(input_file=mysql_file)
        assert table.rows == expected_rows
        assert dbx.dialect == Dialect.MYSQL

    def test_reuse_replaces_state(self, mysql_text, sqlite_text):
        dbx = BoxFormat()
        dbx.read_dbox(mysql_text)
        dbx.read_dbox("a b\n---\n1\n")
        assert dbx.dialect == Dialect.SQLITE
        assert dbx.header == ["a b"]
        assert dbx.boundaries == [3]

    def test_failed_read_resets_state(self, mysql_text):
        dbx = BoxFormat()
        dbx.read_dbox(mysql_text)
        with pytest.raises(MissingRulerError):
            dbx.read_dbox("no\nruler\nhere\n")
        assert dbx.header == []
        assert dbx.dialect is None
        assert dbx.last_result is None

    def test_missing_input(self):
        with pytest.raises(MissingInputError):
            BoxFormat().read_dbox()

    def test_read_simple(self, psql_text, expected_rows):
        dbx = BoxFormat()
        table = dbx.read_simple(psql_text)
        assert table.strategy == "simple"
        assert table.rows == expected_rows
        assert dbx.dialect is None

    def test_latin1_input(self, tmp_path):
        path = tmp_path / "latin.dbox"
        path.write_text(" name | city\n------+--------\n José | Zürich\n", encoding="latin-1")
        dbx = BoxFormat(input_encoding="latin-1")
        table = dbx.read_dbox(input_file=str(path))
        assert table.rows == [["José", "Zürich"]]

    def test_output_to_tsv_uses_last_read(self, psql_text, tmp_path):
        dbx = BoxFormat()
        dbx.read_dbox(psql_text)
        out = tmp_path / "out.tsv"
        dbx.output_to_tsv(str(out))
        assert out.read_text(encoding="utf-8").splitlines()[0] == "id\tdate\ttype\tamount"

    def test_output_to_csv_from_file(self, mysql_file, tmp_path):
        out = tmp_path / "out.csv"
        table = BoxFormat().output_to_csv(str(out), input_file=mysql_file)
        assert table.dialect == Dialect.MYSQL
        assert out.read_text(encoding="utf-8").splitlines()[1] == "11,2010-09-01,factory,146035.00"

    def test_output_without_table(self, tmp_path):
        with pytest.raises(ValueError, match="Nothing to write"):
            BoxFormat().output_to_tsv(str(tmp_path / "x.tsv"))
