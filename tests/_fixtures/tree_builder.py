"""Helper utilities for constructing temporary file trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping, Union

import docx
import fitz
import xlwt
from openpyxl import Workbook


class TreeBuilder:
    """Utility for writing files into a throwaway directory tree."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "proj"
        self.root.mkdir()

    def write(self, files: Mapping[str, Union[str, bytes]]) -> None:
        """Write `path -> contents` entries below the root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(textwrap.dedent(content), encoding="utf-8")

    def path(self, relative: str = "") -> Path:
        return self.root / relative if relative else self.root


def make_pdf(path: Path, text: str) -> Path:
    document = fitz.open()
    page = document.new_page()
    page.insert_text((72, 72), text)
    document.save(str(path))
    document.close()
    return path


def make_docx(path: Path, paragraph: str, row: tuple[str, str]) -> Path:
    document = docx.Document()
    document.add_paragraph(paragraph)
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = row[0]
    table.cell(0, 1).text = row[1]
    document.save(str(path))
    return path


def make_xlsx(path: Path) -> Path:
    workbook = Workbook()
    first = workbook.active
    first.title = "First"
    first.append(["name", "qty"])
    first.append(["apple", 3])
    second = workbook.create_sheet("Second")
    second.append(["x"])
    workbook.save(str(path))
    return path


def make_xls(path: Path) -> Path:
    workbook = xlwt.Workbook()
    first = workbook.add_sheet("First")
    for row, values in enumerate([("name", "qty"), ("apple", 3)]):
        for column, value in enumerate(values):
            first.write(row, column, value)
    second = workbook.add_sheet("Second")
    second.write(0, 0, "x")
    workbook.save(str(path))
    return path


__all__ = ["TreeBuilder", "make_docx", "make_pdf", "make_xls", "make_xlsx"]
