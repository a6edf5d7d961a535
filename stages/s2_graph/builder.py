"""Stage 2: Graph building - row records to calculator cells."""

from __future__ import annotations

import logging
from typing import List, Optional

from config import settings
from core.enums import CellKind, ValueType
from core.exceptions import StageError
from core.interfaces import Stage
from core.models import Calculator, Cell, ImportResult, TableImport, TableRow
from stages.s1_translation import FORWARD_RE, PLACEHOLDER_RE, FormulaTranslator
from utils.numbers import parse_number
from utils.slug import slugify_label

logger = logging.getLogger(__name__)


class GraphBuilder(Stage[TableImport, ImportResult]):
    """Build the ordered cell sequence of a calculator.

    A forward pass assigns identifiers row by row and translates formulas
    with the identifiers known so far. A fix-up pass then rewrites the
    positional placeholders left by range expansion, and forward references,
    once every identifier is known.
    """

    def __init__(
        self,
        translator: Optional[FormulaTranslator] = None,
        default_step: Optional[float] = None,
        default_decimals: Optional[int] = None,
        resolve_forward_references: Optional[bool] = None,
    ) -> None:
        self.translator = translator or FormulaTranslator()
        self.default_step = settings.DEFAULT_STEP if default_step is None else default_step
        self.default_decimals = (
            settings.DEFAULT_DECIMALS if default_decimals is None else default_decimals
        )
        self.resolve_forward_references = (
            settings.RESOLVE_FORWARD_REFERENCES
            if resolve_forward_references is None
            else resolve_forward_references
        )

    @property
    def name(self) -> str:
        return "Graph Building"

    @property
    def stage_number(self) -> int:
        return 2

    def validate_input(self, input_data: TableImport) -> bool:
        return isinstance(input_data, TableImport)

    def execute(self, input_data: TableImport) -> ImportResult:
        if not self.validate_input(input_data):
            raise StageError(self.stage_number, "Expected a TableImport")

        warnings: List[str] = []
        known_cells: List[str] = []
        cells: List[Cell] = []

        for row in input_data.rows:
            cell_id = slugify_label(row.label)
            known_cells.append(cell_id)

            cell = self._build_cell(row, cell_id, known_cells, warnings)
            if cell is None:
                logger.debug("Row %d (%s) has no numeric value; skipped", row.position, row.label)
                continue
            cells.append(cell)

        for cell in cells:
            if cell.is_formula:
                cell.expression = self._fix_up(cell.expression, known_cells, warnings)

        calculator = Calculator(
            name=input_data.name,
            description=input_data.description,
            cells=cells,
        )
        logger.info(
            "Built calculator '%s': %d cells, %d warnings",
            calculator.name, len(cells), len(warnings),
        )
        return ImportResult(calculator=calculator, warnings=warnings)

    def _build_cell(
        self,
        row: TableRow,
        cell_id: str,
        known_cells: List[str],
        warnings: List[str],
    ) -> Optional[Cell]:
        if self.translator.is_formula(row.value):
            return Cell(
                id=cell_id,
                label=row.label,
                kind=CellKind.FORMULA.value,
                expression=self.translator.translate(
                    row.value,
                    known_cells,
                    warnings,
                    defer_forward_references=self.resolve_forward_references,
                ),
                unit=row.unit,
                decimals=self.default_decimals,
                display=True,
            )

        value = parse_number(row.value)
        if value is None:
            return None

        return Cell(
            id=cell_id,
            label=row.label,
            kind=CellKind.INPUT.value,
            value_type=ValueType.NUMBER.value,
            value=value,
            min=row.min,
            max=row.max,
            # A zero step is as unusable as a missing one
            step=row.step or self.default_step,
            unit=row.unit,
        )

    def _fix_up(self, expression: str, known_cells: List[str], warnings: List[str]) -> str:
        """Replace placeholders (and forward references) with final identifiers."""

        def _placeholder(match) -> str:
            index = int(match.group(1))
            if index < len(known_cells):
                return known_cells[index]
            message = f"Invalid range reference: row index {index} out of range"
            logger.warning(message)
            warnings.append(message)
            return match.group(0)

        def _forward(match) -> str:
            # Past the last row: warns and restores the coordinate
            return self.translator.resolver.resolve(match.group(1), known_cells, warnings)

        expression = PLACEHOLDER_RE.sub(_placeholder, expression)
        return FORWARD_RE.sub(_forward, expression)
