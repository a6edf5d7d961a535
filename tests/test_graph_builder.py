import pytest

from core.exceptions import StageError
from core.models import TableImport, TableRow
from stages.s1_translation import FormulaTranslator
from stages.s2_graph import GraphBuilder


def make_rows(*rows):
    """rows: (label, value[, unit[, min, max, step]])"""
    records = []
    for offset, row in enumerate(rows):
        label, value, *rest = row
        unit = rest[0] if rest else ""
        bounds = rest[1:] + [None] * (3 - len(rest[1:]))
        records.append(
            TableRow(
                position=offset + 2,
                label=label,
                value=value,
                unit=unit,
                min=bounds[0],
                max=bounds[1],
                step=bounds[2],
            )
        )
    return TableImport(name="Test", description="", rows=records)


@pytest.fixture
def builder():
    return GraphBuilder(
        FormulaTranslator(dialect="javascript", sum_first_row=2),
        default_step=1.0,
        default_decimals=2,
        resolve_forward_references=True,
    )


def test_input_and_formula_cells(builder):
    result = builder.execute(make_rows(("Diamètre", "6", "m"), ("Surface", "=PI()*B2^2", "m²")))
    diametre, surface = result.calculator.cells

    assert diametre.id == "diametre"
    assert diametre.kind == "input"
    assert diametre.value == 6
    assert diametre.step == 1.0
    assert diametre.value_type == "number"

    assert surface.id == "surface"
    assert surface.kind == "formula"
    assert surface.expression == "Math.PI*diametre**2"
    assert surface.unit == "m²"
    assert surface.decimals == 2
    assert surface.display is True
    assert result.warnings == []


def test_bounds_and_step_are_kept(builder):
    result = builder.execute(make_rows(("Diamètre", "6", "m", 4.0, 10.0, 0.5)))
    cell = result.calculator.cells[0]

    assert (cell.min, cell.max, cell.step) == (4.0, 10.0, 0.5)


def test_unordered_bounds_are_not_corrected(builder):
    cell = builder.execute(make_rows(("X", "1", "", 10.0, 4.0, None))).calculator.cells[0]

    assert (cell.min, cell.max) == (10.0, 4.0)


def test_non_numeric_rows_are_dropped_but_keep_their_row(builder):
    result = builder.execute(make_rows(
        ("A", "1"),
        ("Note", "voir plan"),
        ("B", "2"),
        ("Total", "=B2+B4"),
    ))

    assert [cell.id for cell in result.calculator.cells] == ["a", "b", "total"]
    assert result.calculator.cells[-1].expression == "a+b"


def test_sum_over_previous_inputs(builder):
    result = builder.execute(make_rows(
        ("A", "1"),
        ("B", "2"),
        ("C", "3"),
        ("Total", "=SUM(B2:B4)"),
    ))

    assert result.calculator.cells[-1].expression == "(a + b + c)"


def test_sum_forward_range_is_fixed_up(builder):
    result = builder.execute(make_rows(
        ("Total", "=SUM(B3:B4)"),
        ("A", "1"),
        ("B", "2"),
    ))

    assert result.calculator.cells[0].expression == "(a + b)"


def test_forward_reference_is_resolved_after_all_rows(builder):
    result = builder.execute(make_rows(("Double", "=B3*2"), ("Base", "5")))

    assert result.calculator.cells[0].expression == "base*2"
    assert result.warnings == []


def test_forward_reference_past_last_row_stays_verbatim(builder):
    result = builder.execute(make_rows(("A", "1"), ("Double", "=B99*2")))

    assert result.calculator.cells[-1].expression == "B99*2"
    assert result.warnings == ["Invalid cell reference: B99 - row 99 out of range"]


def test_range_starting_before_first_row_stays_verbatim(builder):
    result = builder.execute(make_rows(("A", "1"), ("B", "2"), ("Total", "=SUM(B1:B3)")))

    assert result.calculator.cells[-1].expression == "SUM(B1:B3)"
    assert any("starts before the first row" in warning for warning in result.warnings)


def test_range_over_other_column_stays_verbatim(builder):
    result = builder.execute(make_rows(("A", "1"), ("B", "2"), ("Total", "=SUM(A2:A4)")))

    assert result.calculator.cells[-1].expression == "SUM(A2:A4)"
    assert any("A2:A4" in warning for warning in result.warnings)


def test_oversized_range_stays_verbatim():
    builder = GraphBuilder(
        FormulaTranslator(dialect="javascript", sum_first_row=2, max_range_expansion=2),
        resolve_forward_references=True,
    )

    result = builder.execute(make_rows(("A", "1"), ("B", "2"), ("C", "3"), ("Total", "=SUM(B2:B4)")))

    assert result.calculator.cells[-1].expression == "SUM(B2:B4)"
    assert any("Range too large" in warning for warning in result.warnings)


def test_forward_reference_next_to_rejected_range(builder):
    result = builder.execute(make_rows(
        ("Total", "=B4+SUM(A2:B4)"),
        ("A", "1"),
        ("B", "2"),
    ))

    assert result.calculator.cells[0].expression == "b+SUM(A2:B4)"


def test_forward_reference_kept_when_fix_up_disabled():
    builder = GraphBuilder(
        FormulaTranslator(dialect="javascript", sum_first_row=2),
        resolve_forward_references=False,
    )

    result = builder.execute(make_rows(("Double", "=B3*2"), ("Base", "5")))

    assert result.calculator.cells[0].expression == "B3*2"


def test_placeholder_beyond_last_row_is_reported(builder):
    result = builder.execute(make_rows(("A", "1"), ("Total", "=SUM(B2:B4)")))
    expression = result.calculator.cells[-1].expression

    assert expression.startswith("(a + total + ")
    assert "__cell_2__" in expression
    assert any("row index 2" in warning for warning in result.warnings)


def test_column_a_reference_warns_but_builds(builder):
    result = builder.execute(make_rows(("A", "1"), ("Double", "=A2*2")))

    assert result.calculator.cells[-1].expression == "A2*2"
    assert len(result.warnings) == 1


def test_duplicate_labels_give_duplicate_ids(builder):
    result = builder.execute(make_rows(("Prix", "1"), ("prix", "2")))

    assert [cell.id for cell in result.calculator.cells] == ["prix", "prix"]


def test_zero_step_falls_back_to_default(builder):
    cell = builder.execute(make_rows(("X", "1", "", None, None, 0.0))).calculator.cells[0]

    assert cell.step == 1.0


def test_decimal_comma_value(builder):
    cell = builder.execute(make_rows(("X", "2,5"))).calculator.cells[0]

    assert cell.value == 2.5


def test_calculator_metadata(builder):
    data = make_rows(("X", "1"))
    data.name = "Plateforme"
    data.description = "Dimensions"

    calculator = builder.execute(data).calculator

    assert calculator.name == "Plateforme"
    assert calculator.description == "Dimensions"


def test_rejects_wrong_input(builder):
    with pytest.raises(StageError):
        builder.execute([("A", "1")])
