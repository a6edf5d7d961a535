"""Abstract base classes for importer components"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class Stage(ABC, Generic[InputT, OutputT]):
    """One synchronous step of a table import.

    Stages hold configuration only; everything produced by an import travels
    through ``execute`` arguments and return values.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name shown by progress trackers"""

    @property
    @abstractmethod
    def stage_number(self) -> int:
        """Position in the import (0 reception .. 3 validation)"""

    @abstractmethod
    def validate_input(self, input_data: InputT) -> bool:
        """Cheap type check run by the orchestrator before ``execute``"""

    @abstractmethod
    def execute(self, input_data: InputT) -> OutputT:
        """Run the stage; raises StageError on unusable input"""


class TableParser(ABC):
    """Source of raw table rows (pasted text, exported file, workbook)"""

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """File suffixes, lower case with the dot"""

    @abstractmethod
    def parse(self, source: str) -> list[list[str]]:
        """Rows of raw string fields, header row included"""
