"""Read delimited text and spreadsheet files into header-keyed rows."""

import csv
from pathlib import Path
from typing import Any, Optional

from openpyxl import load_workbook

from ledgerkit.domain.errors import ValidationError

SPREADSHEET_SUFFIXES = {".xlsx", ".xlsm"}


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _header_names(raw_headers: list[Any]) -> list[str]:
    headers = []
    for position, header in enumerate(raw_headers, start=1):
        name = str(header).strip() if not _is_empty(header) else ""
        headers.append(name or f"Column_{position}")
    return headers


def read_csv(path: Path, delimiter: Optional[str] = None) -> tuple[list[str], list[dict[str, Any]]]:
    """Read a delimited file with a header row.

    Args:
        path: File path
        delimiter: Delimiter to use; sniffed from the first KiB when None

    Returns:
        Tuple of (headers, rows); rows with only empty cells are dropped
    """
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        if delimiter is None:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
            except csv.Error:
                delimiter = ","

        reader = csv.reader(f, delimiter=delimiter)
        try:
            headers = _header_names(next(reader))
        except StopIteration:
            raise ValidationError(f"File has no header row: {path}")

        rows = []
        for values in reader:
            if all(_is_empty(v) for v in values):
                continue
            row = {header: (values[i] if i < len(values) else "") for i, header in enumerate(headers)}
            rows.append(row)
    return headers, rows


def read_spreadsheet(path: Path) -> tuple[list[str], list[dict[str, Any]]]:
    """Read the first sheet of a workbook; the first row holds the headers."""
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        row_iter = sheet.iter_rows(values_only=True)
        try:
            headers = _header_names(list(next(row_iter)))
        except StopIteration:
            raise ValidationError(f"File has no header row: {path}")

        rows = []
        for values in row_iter:
            if all(_is_empty(v) for v in values):
                continue
            rows.append(
                {header: (values[i] if i < len(values) else None) for i, header in enumerate(headers)}
            )
    finally:
        workbook.close()
    return headers, rows


def read_table(file_path: str | Path, delimiter: Optional[str] = None) -> tuple[list[str], list[dict[str, Any]]]:
    """Read a CSV or spreadsheet file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file type is unsupported or has no header
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Import file not found: {file_path}")

    suffix = path.suffix.lower()
    if suffix in SPREADSHEET_SUFFIXES:
        return read_spreadsheet(path)
    if suffix == ".xls":
        raise ValidationError("Legacy .xls workbooks are not supported; save the file as .xlsx or .csv")
    return read_csv(path, delimiter=delimiter)
