"""Stage 3: Structural validation"""

from .validator import CalculatorValidator, validate_calculator

__all__ = ["CalculatorValidator", "validate_calculator"]
