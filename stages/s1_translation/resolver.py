"""Coordinate references (``B4``) to cell identifiers."""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence, Tuple

from openpyxl.utils.cell import coordinate_from_string
from openpyxl.utils.exceptions import CellCoordinatesException

from config import settings

logger = logging.getLogger(__name__)

# Value-column reference to a row not yet imported, settled by the graph builder
FORWARD_RE = re.compile(r"__ref_([A-Z]+\d+)__")


def forward_token(coordinate: str) -> str:
    return f"__ref_{coordinate}__"


class ReferenceResolver:
    """Maps spreadsheet coordinates onto the identifiers of imported cells.

    Every table row is one variable: only the value column is addressable,
    and the first data row (row 2 under a one-line header) is the cell at
    position 0 of the known-identifier sequence.
    """

    def __init__(
        self,
        value_column: Optional[str] = None,
        first_data_row: Optional[int] = None,
    ) -> None:
        self.value_column = (value_column or settings.VALUE_COLUMN).upper()
        self.first_data_row = (
            settings.FIRST_DATA_ROW if first_data_row is None else first_data_row
        )

    def row_index(self, row_number: int) -> int:
        """Cell position addressed by a spreadsheet row number."""
        return row_number - self.first_data_row

    def resolve(
        self,
        coordinate: str,
        known_cells: Sequence[str],
        warnings: Optional[list[str]] = None,
    ) -> str:
        """Identifier for *coordinate*, or *coordinate* itself when unresolvable.

        Unresolvable coordinates are left verbatim so they stay visible in the
        translated expression; a warning is logged and added to *warnings*.
        """
        parsed = _split(coordinate)
        if parsed is None:
            return coordinate

        column, row = parsed

        if column != self.value_column:
            _warn(
                f"Invalid column reference: {coordinate} - only references to "
                f"column {self.value_column} (value) are supported",
                warnings,
            )
            return coordinate

        index = self.row_index(row)
        if index < 0 or index >= len(known_cells):
            _warn(f"Invalid cell reference: {coordinate} - row {row} out of range", warnings)
            return coordinate

        return known_cells[index]

    def try_resolve(self, coordinate: str, known_cells: Sequence[str]) -> Optional[str]:
        """Silent variant: identifier for a value-column coordinate in range, else None."""
        parsed = _split(coordinate)
        if parsed is None or parsed[0] != self.value_column:
            return None
        index = self.row_index(parsed[1])
        if 0 <= index < len(known_cells):
            return known_cells[index]
        return None

    def is_forward(self, coordinate: str, known_cells: Sequence[str]) -> bool:
        """True for a value-column coordinate past the identifiers known so far."""
        parsed = _split(coordinate)
        if parsed is None or parsed[0] != self.value_column:
            return False
        return self.row_index(parsed[1]) >= len(known_cells)


def _split(coordinate: str) -> Optional[Tuple[str, int]]:
    try:
        return coordinate_from_string(coordinate)
    except CellCoordinatesException:
        logger.debug("Not a cell coordinate: %s", coordinate)
        return None


def _warn(message: str, warnings: Optional[list[str]]) -> None:
    logger.warning(message)
    if warnings is not None:
        warnings.append(message)
