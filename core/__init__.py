"""Core abstractions for the calculator importer"""

from .models import *
from .enums import *
from .exceptions import *
from .interfaces import *

__all__ = [
    # Models
    "TableRow",
    "TableImport",
    "Cell",
    "Calculator",
    "ImportResult",
    "ValidationReport",
    # Enums
    "CellKind",
    "ValueType",
    # Exceptions
    "CalcSheetError",
    "StageError",
    "FileParseError",
    "ConfigurationError",
    "CalculatorValidationError",
    # Interfaces
    "Stage",
    "TableParser",
]
