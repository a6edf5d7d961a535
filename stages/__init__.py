"""Import stages"""

from .s0_reception import Receiver
from .s1_translation import FormulaTranslator, ReferenceResolver
from .s2_graph import GraphBuilder
from .s3_validation import CalculatorValidator

__all__ = [
    "Receiver",
    "ReferenceResolver",
    "FormulaTranslator",
    "GraphBuilder",
    "CalculatorValidator",
]
