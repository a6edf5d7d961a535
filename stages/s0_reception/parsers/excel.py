"""Excel workbook parser"""

import zipfile
from pathlib import Path
from typing import List, Optional

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from core.exceptions import FileParseError
from .base import TableParser


class ExcelParser(TableParser):
    """Parser for .xlsx workbooks laid out like the TSV table"""

    def __init__(self, sheet_name: Optional[str] = None):
        self.sheet_name = sheet_name

    @property
    def supported_extensions(self) -> List[str]:
        return [".xlsx", ".xlsm"]

    def parse(self, source: str) -> List[List[str]]:
        """Read one worksheet; formula cells keep their ``=...`` text"""
        path = Path(source)

        if not path.exists():
            raise FileParseError(f"File not found: {source}", source)

        try:
            workbook = openpyxl.load_workbook(path, data_only=False, read_only=True)
        except (InvalidFileException, zipfile.BadZipFile, OSError, KeyError, ValueError) as e:
            raise FileParseError(f"Failed to open workbook: {e}", source) from e

        try:
            if self.sheet_name is None:
                sheet = workbook.worksheets[0]
            elif self.sheet_name in workbook.sheetnames:
                sheet = workbook[self.sheet_name]
            else:
                raise FileParseError(
                    f"Sheet '{self.sheet_name}' not found. "
                    f"Available: {', '.join(workbook.sheetnames)}",
                    source,
                )

            rows = []
            for row in sheet.iter_rows(values_only=True):
                rows.append([self._cell_text(value) for value in row])
        finally:
            workbook.close()

        # Trailing empty rows carry no table content
        while rows and not any(rows[-1]):
            rows.pop()
        return rows

    def _cell_text(self, value: object) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return str(value).upper()
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
