"""Reading and writing tabular files (CSV and Excel)."""

import csv
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from ledgerdesk.domain.errors import ValidationError, unsupported_file_type

logger = logging.getLogger(__name__)

CSV_SUFFIXES = {".csv"}
EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _suffix(path: str | Path) -> str:
    suffix = Path(path).suffix.lower()
    if suffix not in CSV_SUFFIXES | EXCEL_SUFFIXES:
        raise ValidationError(unsupported_file_type(str(path)))
    return suffix


def read_rows(path: str | Path) -> list[dict[str, Any]]:
    """Read a CSV or Excel file into a list of header -> value rows.

    Headers are trimmed; fully blank rows are skipped. Excel cells keep their
    native types (numbers stay numbers).

    Raises:
        ValidationError: If the extension is not CSV or Excel
        FileNotFoundError: If the file doesn't exist
    """
    suffix = _suffix(path)
    if not Path(path).exists():
        raise FileNotFoundError(f"File not found: {path}")

    if suffix in CSV_SUFFIXES:
        rows = _read_csv(Path(path))
    else:
        rows = _read_excel(Path(path))
    logger.info("Read %d row(s) from %s", len(rows), path)
    return rows


def _read_csv(path: Path) -> list[dict[str, Any]]:
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        sample = f.read(1024)
        f.seek(0)
        try:
            delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
        except csv.Error:
            # Single-column or empty files give the sniffer nothing to work with
            delimiter = ","

        reader = csv.DictReader(f, delimiter=delimiter)
        if reader.fieldnames is None:
            return []
        reader.fieldnames = [name.strip() for name in reader.fieldnames]

        rows = []
        for row in reader:
            # Surplus cells without a header are collected under None
            row.pop(None, None)
            if all(_is_blank(value) for value in row.values()):
                continue
            rows.append(row)
        return rows


def _read_excel(path: Path) -> list[dict[str, Any]]:
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        values = sheet.iter_rows(values_only=True)
        header = next(values, None)
        if header is None:
            return []
        headers = [
            str(name).strip() if not _is_blank(name) else f"column_{index}"
            for index, name in enumerate(header, start=1)
        ]

        rows = []
        for cells in values:
            if all(_is_blank(value) for value in cells):
                continue
            rows.append(dict(zip(headers, cells)))
        return rows
    finally:
        workbook.close()


def write_rows(
    path: str | Path,
    rows: Iterable[dict[str, Any]],
    headers: Optional[list[str]] = None,
    sheet_name: str = "Data",
) -> int:
    """Write rows to a CSV or Excel file chosen by extension.

    Args:
        path: Output path (.csv or .xlsx)
        rows: Row dicts
        headers: Column order; defaults to the keys of the first row
        sheet_name: Worksheet title for Excel output

    Returns:
        Number of data rows written
    """
    suffix = _suffix(path)
    rows = list(rows)
    if headers is None:
        headers = list(rows[0].keys()) if rows else []

    if suffix in CSV_SUFFIXES:
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=headers, extrasaction="ignore")
            writer.writeheader()
            writer.writerows(rows)
    else:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = sheet_name
        sheet.append(headers)
        for cell in sheet[1]:
            cell.font = Font(bold=True)
        for row in rows:
            sheet.append([row.get(header, "") for header in headers])
        for index, header in enumerate(headers, start=1):
            width = max([len(str(header))] + [len(str(row.get(header, ""))) for row in rows])
            sheet.column_dimensions[get_column_letter(index)].width = min(width + 2, 50)
        workbook.save(path)

    logger.info("Wrote %d row(s) to %s", len(rows), path)
    return len(rows)
