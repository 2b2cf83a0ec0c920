"""Workbook extraction backed by openpyxl, xlrd and pyxlsb."""

from __future__ import annotations

import csv
import io
from typing import Any, Iterable, List, Sequence, Tuple

import xlrd
from openpyxl import load_workbook
from pyxlsb import open_workbook as open_xlsb

from ..classifier import ContentKind, file_extension
from .base import Extractor

Sheet = Tuple[str, Iterable[Sequence[Any]]]


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    # xlrd and pyxlsb hand every number back as a float.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _render(title: str, rows: Iterable[Sequence[Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for row in rows:
        writer.writerow([_cell(value) for value in row])
    return f"Sheet: {title}\n{buffer.getvalue()}"


def _read_openxml(path: str) -> List[str]:
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        return [
            _render(sheet.title, sheet.iter_rows(values_only=True))
            for sheet in workbook.worksheets
        ]
    finally:
        workbook.close()


def _read_xls(path: str) -> List[str]:
    book = xlrd.open_workbook(path)
    try:
        return [
            _render(sheet.name, (sheet.row_values(index) for index in range(sheet.nrows)))
            for sheet in book.sheets()
        ]
    finally:
        book.release_resources()


def _read_xlsb(path: str) -> List[str]:
    sections: List[str] = []
    with open_xlsb(path) as workbook:
        for name in workbook.sheets:
            with workbook.get_sheet(name) as sheet:
                rows = [[cell.v for cell in row] for row in sheet.rows()]
            sections.append(_render(name, rows))
    return sections


_READERS = {
    ".xls": _read_xls,
    ".xlsb": _read_xlsb,
}


class SpreadsheetExtractor(Extractor):
    """Renders every sheet as a ``Sheet: <name>`` header plus CSV rows.

    Sheets are emitted in workbook order and separated by a blank line.
    Formula cells contribute their cached values. Legacy ``.xls`` goes
    through xlrd, binary ``.xlsb`` through pyxlsb and everything else through
    openpyxl.
    """

    kind = ContentKind.SPREADSHEET
    label = "Spreadsheet"

    def read_text(self, path: str) -> str:
        reader = _READERS.get(file_extension(path), _read_openxml)
        return "\n".join(reader(path))


_EXTRACTOR = SpreadsheetExtractor()


def extract_text_from_spreadsheet(path: str) -> str:
    return _EXTRACTOR.extract(path)
