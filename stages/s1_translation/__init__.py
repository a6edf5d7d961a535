"""Stage 1: Formula translation"""

from .dialects import DIALECTS, JAVASCRIPT, PYTHON, TargetDialect, get_dialect
from .resolver import FORWARD_RE, ReferenceResolver, forward_token
from .translator import PLACEHOLDER_RE, FormulaTranslator, placeholder

__all__ = [
    "DIALECTS",
    "JAVASCRIPT",
    "PYTHON",
    "TargetDialect",
    "get_dialect",
    "FORWARD_RE",
    "ReferenceResolver",
    "forward_token",
    "PLACEHOLDER_RE",
    "FormulaTranslator",
    "placeholder",
]
