"""Stage 3: Validation - structural checks on a finished calculator."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Union

from pydantic import ValidationError as SchemaError

from core.enums import CellKind
from core.interfaces import Stage
from core.models import Calculator, ValidationReport

logger = logging.getLogger(__name__)

VALID_KINDS = {kind.value for kind in CellKind}


class CalculatorValidator(Stage[Calculator, ValidationReport]):
    """Collects every structural problem of a calculator; never raises."""

    @property
    def name(self) -> str:
        return "Validation"

    @property
    def stage_number(self) -> int:
        return 3

    def validate_input(self, input_data: Union[Calculator, Mapping[str, Any]]) -> bool:
        return isinstance(input_data, (Calculator, Mapping))

    def execute(self, input_data: Union[Calculator, Mapping[str, Any]]) -> ValidationReport:
        return validate_calculator(input_data)


def validate_calculator(calculator: Union[Calculator, Mapping[str, Any]]) -> ValidationReport:
    """Check a calculator (model or serialized document).

    Problems are accumulated in cell order so a caller can report all of
    them at once.
    """
    if isinstance(calculator, Mapping):
        try:
            calculator = Calculator.model_validate(calculator)
        except SchemaError as e:
            return ValidationReport(valid=False, errors=_schema_errors(e))

    errors: List[str] = []

    if not calculator.cells:
        errors.append("Calculator must contain at least one cell")

    seen_ids = set()
    for index, cell in enumerate(calculator.cells):
        if not cell.id:
            errors.append(f"Cell {index}: missing id")
        elif cell.id in seen_ids:
            errors.append(f'Cell {index}: duplicate id "{cell.id}"')
        else:
            seen_ids.add(cell.id)

        if not cell.label:
            errors.append(f"Cell {index}: missing label")

        if cell.kind not in VALID_KINDS:
            errors.append(f'Cell {index}: invalid type "{cell.kind}"')

        if cell.is_input and cell.value is None:
            errors.append(f"Cell {index}: missing value for input")

        if cell.is_formula and not cell.expression:
            errors.append(f"Cell {index}: missing formula")

    if errors:
        logger.info("Calculator '%s' failed validation: %d error(s)", calculator.name, len(errors))

    return ValidationReport(valid=not errors, errors=errors)


def _schema_errors(error: SchemaError) -> List[str]:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        messages.append(f"{location}: {item['msg']}")
    return messages
