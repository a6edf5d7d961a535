"""Spreadsheet formula dialect to target expression dialect.

The translation is an ordered sequence of textual rewrites rather than a
parse: references first, then function names, operators, and finally the
two structural forms (``SUM`` over a range and single-level ``IF``).
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence

from openpyxl.utils.cell import column_index_from_string, range_boundaries

from config import settings
from .dialects import TargetDialect, get_dialect
from .resolver import ReferenceResolver, forward_token

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

COORDINATE_RE = re.compile(r"([A-Z]+)(\d+)")
SUM_RANGE_RE = re.compile(r"SUM\(([A-Z]+)(\d+):([A-Z]+)(\d+)\)", re.IGNORECASE)
IF_RE = re.compile(r"IF\(([^,]+),([^,]+),([^)]+)\)", re.IGNORECASE)
NOT_EQUAL_RE = re.compile(r"<>")
EQUAL_RE = re.compile(r"(?<![<>!=])=(?!=)")
UNSUPPORTED_CALL_RE = re.compile(r"(?<![A-Za-z0-9_.])([A-Z][A-Z0-9_.]*)\(")

_RANGE_TOKEN_RE = re.compile(r"__RANGE_(\d+)__")

# Positional reference emitted by range expansion, resolved by the graph builder
PLACEHOLDER_RE = re.compile(r"__cell_(\d+)__")


def placeholder(index: int) -> str:
    return f"__cell_{index}__"


class FormulaTranslator:
    """Rewrites ``=...`` spreadsheet formulas into a target expression dialect.

    Instances hold only read-only configuration, so one translator can serve
    concurrent imports.
    """

    def __init__(
        self,
        dialect: str | TargetDialect | None = None,
        resolver: Optional[ReferenceResolver] = None,
        formula_marker: Optional[str] = None,
        sum_first_row: Optional[int] = None,
        max_range_expansion: Optional[int] = None,
    ) -> None:
        self.dialect = get_dialect(dialect or settings.TARGET_DIALECT)
        self.resolver = resolver or ReferenceResolver()
        self.formula_marker = formula_marker or settings.FORMULA_MARKER
        self.sum_first_row = (
            settings.SUM_RANGE_FIRST_ROW if sum_first_row is None else sum_first_row
        )
        self.max_range_expansion = (
            settings.MAX_RANGE_EXPANSION
            if max_range_expansion is None
            else max_range_expansion
        )
        self._function_patterns = tuple(
            (re.compile(re.escape(name) + r"\(", re.IGNORECASE), f"{target}(")
            for name, target in self.dialect.functions.items()
        )

    def is_formula(self, value: Optional[str]) -> bool:
        return isinstance(value, str) and value.strip().startswith(self.formula_marker)

    def translate(
        self,
        formula: str,
        known_cells: Sequence[str],
        warnings: Optional[list[str]] = None,
        defer_forward_references: bool = False,
    ) -> str:
        """Translate *formula* given the identifiers assigned so far.

        Range sums are expanded into positional placeholders (see
        :func:`placeholder`); everything else that can be resolved is
        resolved immediately. With *defer_forward_references*, value-column
        references past the known identifiers become forward tokens (see
        :func:`forward_token`) instead of warnings, for a later pass to settle.
        """
        expr = formula.strip()
        if expr.startswith(self.formula_marker):
            expr = expr[len(self.formula_marker):]
        expr = expr.replace(";", ",").replace("$", "")

        expr, ranges = self._shield_ranges(expr)
        expr = self._replace_references(expr, known_cells, warnings, defer_forward_references)
        expr = self._replace_functions(expr)
        expr = expr.replace(self.dialect.pi_call, self.dialect.pi_constant)
        expr = self._replace_operators(expr)
        expr = self._expand_ranges(expr, ranges, warnings)
        expr = self._expand_conditionals(expr)

        for name in UNSUPPORTED_CALL_RE.findall(expr):
            _warn(f"Unsupported function {name}() in formula {formula.strip()}", warnings)

        logger.debug("Translated %s -> %s", formula, expr)
        return expr

    # ------------------------------------------------------------------
    # Rewrite steps
    # ------------------------------------------------------------------

    def _shield_ranges(self, expr: str) -> tuple[str, list[re.Match]]:
        """Hide ``SUM(B2:B4)`` behind tokens so its endpoints stay coordinates."""
        ranges: list[re.Match] = []

        def _replace(match: re.Match) -> str:
            ranges.append(match)
            return f"__RANGE_{len(ranges) - 1}__"

        return SUM_RANGE_RE.sub(_replace, expr), ranges

    def _replace_references(
        self,
        expr: str,
        known_cells: Sequence[str],
        warnings: Optional[list[str]],
        defer_forward: bool,
    ) -> str:
        def _replace(match: re.Match) -> str:
            coordinate = match.group(0)
            if defer_forward and self.resolver.is_forward(coordinate, known_cells):
                return forward_token(coordinate)
            return self.resolver.resolve(coordinate, known_cells, warnings)

        return COORDINATE_RE.sub(_replace, expr)

    def _replace_functions(self, expr: str) -> str:
        for pattern, target in self._function_patterns:
            expr = pattern.sub(lambda _m, t=target: t, expr)
        return expr

    def _replace_operators(self, expr: str) -> str:
        expr = expr.replace("^", self.dialect.power_operator)
        expr = NOT_EQUAL_RE.sub(self.dialect.not_equal_operator, expr)
        expr = EQUAL_RE.sub(self.dialect.equal_operator, expr)
        return expr

    def _expand_ranges(
        self, expr: str, ranges: list[re.Match], warnings: Optional[list[str]]
    ) -> str:
        def _replace(token: re.Match) -> str:
            match = ranges[int(token.group(1))]
            return self._expand_sum(match, warnings)

        return _RANGE_TOKEN_RE.sub(_replace, expr)

    def _expand_sum(self, match: re.Match, warnings: Optional[list[str]]) -> str:
        original = match.group(0)
        col1, row1, col2, row2 = match.groups()
        value_column = self.resolver.value_column

        try:
            bounds = f"{col1}{row1}:{col2}{row2}".upper()
            min_col, min_row, max_col, max_row = range_boundaries(bounds)
        except ValueError:
            _warn(f"Invalid range reference: {original}", warnings)
            return original

        value_index = column_index_from_string(value_column)
        if min_col != value_index or max_col != value_index:
            _warn(
                f"Invalid range reference: {original} - only ranges over "
                f"column {value_column} (value) are supported",
                warnings,
            )
            return original

        # Reversed bounds (B4:B2) name the same range as B2:B4
        start = min(min_row, max_row) - self.sum_first_row
        end = max(min_row, max_row) - self.sum_first_row

        if start < 0:
            _warn(f"Invalid range reference: {original} - starts before the first row", warnings)
            return original
        if end - start + 1 > self.max_range_expansion:
            _warn(
                f"Range too large: {original} - more than "
                f"{self.max_range_expansion} cells",
                warnings,
            )
            return original

        terms = [placeholder(index) for index in range(start, end + 1)]
        return f"({' + '.join(terms)})"

    def _expand_conditionals(self, expr: str) -> str:
        return IF_RE.sub(
            lambda m: self.dialect.format_conditional(
                m.group(1).strip(), m.group(2).strip(), m.group(3).strip()
            ),
            expr,
        )


def _warn(message: str, warnings: Optional[list[str]]) -> None:
    logger.warning(message)
    if warnings is not None:
        warnings.append(message)
