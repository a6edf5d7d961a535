"""Core enumerations for the calculator importer"""

from enum import Enum


class CellKind(str, Enum):
    """Kind of a calculator cell"""
    INPUT = "input"
    FORMULA = "formula"


class ValueType(str, Enum):
    """Value type carried by input cells"""
    NUMBER = "number"
