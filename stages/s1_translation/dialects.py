"""Target expression dialects for translated formulas."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from core.exceptions import ConfigurationError


@dataclass(frozen=True)
class TargetDialect:
    """Spelling of functions and operators in a target expression language.

    ``functions`` maps spreadsheet function names to the call target that
    replaces them; ``conditional`` is a format string with ``condition``,
    ``then`` and ``otherwise`` fields.
    """

    name: str
    functions: Mapping[str, str]
    pi_constant: str
    conditional: str
    power_operator: str = "**"
    equal_operator: str = "=="
    not_equal_operator: str = "!="

    def __post_init__(self) -> None:
        object.__setattr__(self, "functions", MappingProxyType(dict(self.functions)))

    @property
    def pi_call(self) -> str:
        """Nullary call produced when ``PI()`` is rewritten as a function"""
        return f"{self.functions['PI']}()"

    def format_conditional(self, condition: str, then: str, otherwise: str) -> str:
        return self.conditional.format(condition=condition, then=then, otherwise=otherwise)


JAVASCRIPT = TargetDialect(
    name="javascript",
    functions={
        "PI": "Math.PI",
        "SQRT": "Math.sqrt",
        "POW": "Math.pow",
        "ABS": "Math.abs",
        "ROUND": "Math.round",
        "FLOOR": "Math.floor",
        "CEIL": "Math.ceil",
        "SIN": "Math.sin",
        "COS": "Math.cos",
        "TAN": "Math.tan",
        "MIN": "Math.min",
        "MAX": "Math.max",
        "EXP": "Math.exp",
        "LOG": "Math.log",
    },
    pi_constant="Math.PI",
    conditional="({condition} ? {then} : {otherwise})",
)

PYTHON = TargetDialect(
    name="python",
    functions={
        "PI": "math.pi",
        "SQRT": "math.sqrt",
        "POW": "pow",
        "ABS": "abs",
        "ROUND": "round",
        "FLOOR": "math.floor",
        "CEIL": "math.ceil",
        "SIN": "math.sin",
        "COS": "math.cos",
        "TAN": "math.tan",
        "MIN": "min",
        "MAX": "max",
        "EXP": "math.exp",
        "LOG": "math.log",
    },
    pi_constant="math.pi",
    conditional="({then} if {condition} else {otherwise})",
)

DIALECTS: Mapping[str, TargetDialect] = MappingProxyType(
    {dialect.name: dialect for dialect in (JAVASCRIPT, PYTHON)}
)


def get_dialect(name: str | TargetDialect) -> TargetDialect:
    """Look up a dialect by name (case-insensitive)."""
    if isinstance(name, TargetDialect):
        return name
    try:
        return DIALECTS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown target dialect '{name}'. Allowed: {sorted(DIALECTS)}"
        ) from None
