"""Stage 0: Reception - table rows to row records"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from config import settings
from core.interfaces import Stage
from core.models import TableRow
from core.exceptions import StageError, FileParseError
from utils.numbers import parse_number
from .parsers import ExcelParser, TSVParser

logger = logging.getLogger(__name__)


class Receiver(Stage[List[List[str]], List[TableRow]]):
    """Stage 0: Reception - normalize raw table rows"""

    @property
    def name(self) -> str:
        return "Reception"

    @property
    def stage_number(self) -> int:
        return 0

    def __init__(self, header_token: Optional[str] = None):
        self.header_token = (header_token or settings.HEADER_LABEL_TOKEN).lower()
        self.tsv_parser = TSVParser()

    def validate_input(self, input_data: List[List[str]]) -> bool:
        if not isinstance(input_data, list):
            return False
        return all(isinstance(row, (list, tuple)) for row in input_data)

    def execute(self, input_data: List[List[str]]) -> List[TableRow]:
        """Turn raw rows into records, dropping the header and blank labels"""
        if not self.validate_input(input_data):
            raise StageError(self.stage_number, "Expected a list of table rows")

        records: List[TableRow] = []
        for row_index, row in enumerate(input_data):
            record = self.normalize_row(row, row_index)
            if record is not None:
                records.append(record)

        logger.debug("Received %d of %d table rows", len(records), len(input_data))
        return records

    def receive_text(self, tsv_data: str) -> List[TableRow]:
        """Parse pasted TSV text into records"""
        return self.execute(self.tsv_parser.parse(tsv_data))

    def receive_file(self, file_path: str, sheet_name: Optional[str] = None) -> List[TableRow]:
        """Parse a .tsv/.txt/.xlsx file into records"""
        path = Path(file_path)
        ext = path.suffix.lower()

        if ext in self.tsv_parser.supported_extensions:
            parse = self.tsv_parser.parse_file
        elif ext in ExcelParser().supported_extensions:
            parse = ExcelParser(sheet_name).parse
        else:
            raise StageError(
                self.stage_number,
                f"Unsupported file type: {ext or '(none)'}. Supported: .tsv, .txt, .xlsx, .xlsm"
            )

        try:
            rows = parse(str(path))
        except FileParseError as e:
            raise StageError(self.stage_number, str(e)) from e

        return self.execute(rows)

    def normalize_row(self, row: Sequence[str], row_index: int) -> Optional[TableRow]:
        """Build a record for one row, or None when the row is skipped"""
        if row_index == 0 or not row or not row[0]:
            return None

        label = str(row[0]).strip()
        if not label or label.lower() == self.header_token:
            return None

        return TableRow(
            position=row_index + 1,
            label=label,
            value=self._field(row, 1),
            unit=self._field(row, 2),
            min=parse_number(self._field(row, 3)),
            max=parse_number(self._field(row, 4)),
            step=parse_number(self._field(row, 5)),
        )

    def _field(self, row: Sequence[str], index: int) -> str:
        if index >= len(row) or row[index] is None:
            return ""
        return str(row[index]).strip()
