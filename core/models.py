"""Core data models for the calculator importer"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import CellKind
from .exceptions import CalculatorValidationError


# ─────────────────────────────────────────────────────────────
# Stage 0: Reception
# ─────────────────────────────────────────────────────────────

class TableRow(BaseModel):
    """Normalized non-header table row"""
    position: int  # 1-based line number in the source table
    label: str
    value: str = ""
    unit: str = ""
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None


class TableImport(BaseModel):
    """Rows of one table plus calculator metadata"""
    name: str
    description: str = ""
    rows: list[TableRow] = []


# ─────────────────────────────────────────────────────────────
# Stage 2: Computation graph
# ─────────────────────────────────────────────────────────────

class Cell(BaseModel):
    """One node of the calculator graph.

    Attribute names follow the importer vocabulary (``kind``, ``expression``);
    the serialized document uses the renderer's wire names (``type``,
    ``formula``, ``valueType``). Fields are optional so that an externally
    produced document with missing fields can still be loaded and reported
    by the validator.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    label: Optional[str] = None
    kind: Optional[str] = Field(default=None, alias="type")

    # Input cells
    value_type: Optional[str] = Field(default=None, alias="valueType")
    value: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None

    # Formula cells
    expression: Optional[str] = Field(default=None, alias="formula")
    decimals: Optional[int] = None
    display: Optional[bool] = None

    unit: Optional[str] = None

    @property
    def is_input(self) -> bool:
        return self.kind == CellKind.INPUT.value

    @property
    def is_formula(self) -> bool:
        return self.kind == CellKind.FORMULA.value


class Calculator(BaseModel):
    """Ordered cell sequence; order is also the coordinate addressing order"""
    name: str = ""
    description: str = ""
    cells: list[Cell] = []

    def to_dict(self) -> dict[str, Any]:
        """Document shape expected by the calculator renderer"""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


class ImportResult(BaseModel):
    """Calculator produced by one import call, with its warnings"""
    calculator: Calculator
    warnings: list[str] = []


# ─────────────────────────────────────────────────────────────
# Stage 3: Validation
# ─────────────────────────────────────────────────────────────

class ValidationReport(BaseModel):
    """Outcome of structural validation"""
    valid: bool
    errors: list[str] = []

    def raise_for_errors(self) -> None:
        if not self.valid:
            raise CalculatorValidationError(list(self.errors))
