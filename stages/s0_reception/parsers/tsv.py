"""Tab-separated text parser (spreadsheet clipboard paste)"""

from pathlib import Path
from typing import List

from core.exceptions import FileParseError
from utils.encoding import read_text
from .base import TableParser


class TSVParser(TableParser):
    """Parser for tab-separated tables pasted from LibreOffice or Excel"""

    @property
    def supported_extensions(self) -> List[str]:
        return [".tsv", ".txt"]

    def parse(self, source: str) -> List[List[str]]:
        """Split raw TSV text into rows of fields"""
        text = source.strip()
        if not text:
            return []
        return [line.rstrip("\r").split("\t") for line in text.split("\n")]

    def parse_file(self, file_path: str) -> List[List[str]]:
        """Read and split a TSV file"""
        path = Path(file_path)

        if not path.exists():
            raise FileParseError(f"File not found: {file_path}", file_path)

        try:
            text = read_text(path)
        except OSError as e:
            raise FileParseError(f"Failed to read table file: {e}", file_path) from e

        return self.parse(text)
