"""Tests for reading CSV and spreadsheet files."""

from datetime import datetime

import pytest
from openpyxl import Workbook

from ledgerkit.domain.errors import ValidationError
from ledgerkit.utils.table_reader import read_table


def test_semicolon_delimiter_is_sniffed(fixtures_dir):
    headers, rows = read_table(fixtures_dir / "bbva_statement.csv")

    assert "Concepto" in headers
    assert len(rows) == 3


def test_explicit_delimiter(tmp_path):
    path = tmp_path / "pipes.csv"
    path.write_text("Date|Amount\n2024-01-01|-5\n", encoding="utf-8")

    headers, rows = read_table(path, delimiter="|")

    assert headers == ["Date", "Amount"]
    assert rows == [{"Date": "2024-01-01", "Amount": "-5"}]


def test_blank_headers_and_empty_rows(tmp_path):
    path = tmp_path / "statement.csv"
    path.write_text("Date,,Amount\n2024-01-01,x,-5\n,,\n2024-01-02,y\n", encoding="utf-8")

    headers, rows = read_table(path)

    assert headers == ["Date", "Column_2", "Amount"]
    assert len(rows) == 2
    assert rows[1]["Amount"] == ""


def test_byte_order_mark_is_stripped(tmp_path):
    path = tmp_path / "bom.csv"
    path.write_bytes("\ufeffFecha,Importe\n01/01/2024,-5\n".encode("utf-8"))

    headers, _ = read_table(path)

    assert headers[0] == "Fecha"


def test_spreadsheet(tmp_path):
    path = tmp_path / "statement.xlsx"
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Fecha", "Concepto", "Importe"])
    sheet.append([datetime(2024, 1, 5), "MERCADONA", -50.0])
    sheet.append([None, None, None])
    sheet.append([datetime(2024, 1, 6), "NOMINA", 1200])
    workbook.save(path)

    headers, rows = read_table(path)

    assert headers == ["Fecha", "Concepto", "Importe"]
    assert len(rows) == 2
    assert rows[0]["Concepto"] == "MERCADONA"
    assert rows[1]["Importe"] == 1200


def test_empty_file_has_no_header(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    with pytest.raises(ValidationError, match="no header"):
        read_table(path)


def test_legacy_workbook_is_rejected(tmp_path):
    path = tmp_path / "old.xls"
    path.write_bytes(b"\xd0\xcf\x11\xe0")

    with pytest.raises(ValidationError, match=".xls"):
        read_table(path)


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        read_table("/nonexistent/statement.csv")
