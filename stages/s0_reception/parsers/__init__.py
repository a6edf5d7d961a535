"""Table source parsers"""

from .base import TableParser
from .tsv import TSVParser
from .excel import ExcelParser

__all__ = [
    "TableParser",
    "TSVParser",
    "ExcelParser",
]
