"""Base table parser"""

from abc import ABC, abstractmethod

from core.interfaces import TableParser as ITableParser


class TableParser(ITableParser, ABC):
    """Abstract base class for table parsers"""

    @abstractmethod
    def parse(self, source: str) -> list[list[str]]:
        """Split a table source into rows of raw string fields"""
        pass
