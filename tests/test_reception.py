from pathlib import Path

import pytest
from openpyxl import Workbook

from core.exceptions import StageError
from stages.s0_reception import Receiver
from stages.s0_reception.parsers import TSVParser


HEADER = "Label\tValeur\tUnité\tMin\tMax\tStep"


def test_tsv_parser_splits_lines_and_tabs():
    rows = TSVParser().parse("Label\tValeur\r\nA\t1\r\n")

    assert rows == [["Label", "Valeur"], ["A", "1"]]


def test_tsv_parser_empty_text():
    assert TSVParser().parse("  \n ") == []


def test_receiver_normalizes_full_row():
    rows = Receiver().receive_text(f"{HEADER}\nDiamètre\t6\tm\t4\t10\t0.5")

    assert len(rows) == 1
    row = rows[0]
    assert row.position == 2
    assert row.label == "Diamètre"
    assert row.value == "6"
    assert row.unit == "m"
    assert row.min == 4.0
    assert row.max == 10.0
    assert row.step == 0.5


def test_receiver_missing_trailing_fields_are_absent():
    row = Receiver().receive_text(f"{HEADER}\nSurface\t=PI()*B2^2")[0]

    assert row.value == "=PI()*B2^2"
    assert row.unit == ""
    assert row.min is None
    assert row.max is None
    assert row.step is None


def test_receiver_skips_first_row_blank_labels_and_repeated_header():
    text = "\n".join([
        "Not a header\t1",
        "A\t1",
        "\t2",
        "   \t3",
        "LABEL\tValue",
        "B\t4",
    ])
    rows = Receiver().receive_text(text)

    assert [row.label for row in rows] == ["A", "B"]


def test_receiver_trims_fields_and_parses_decimal_comma():
    row = Receiver().receive_text(f"{HEADER}\n  Hauteur  \t 2,5 \t cm \t0,5\tabc\t")[0]

    assert row.label == "Hauteur"
    assert row.value == "2,5"
    assert row.unit == "cm"
    assert row.min == 0.5
    assert row.max is None
    assert row.step is None


def test_receiver_rejects_non_row_input():
    with pytest.raises(StageError):
        Receiver().execute("Label\tValeur")


def test_receiver_reads_tsv_file(tmp_path: Path):
    file_path = tmp_path / "table.tsv"
    file_path.write_text(f"{HEADER}\nLongueur\t3\tm\n", encoding="utf-8")

    rows = Receiver().receive_file(str(file_path))

    assert [row.label for row in rows] == ["Longueur"]


def test_receiver_reads_xlsx_workbook(tmp_path: Path):
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Calcul"
    sheet.append(["Label", "Valeur", "Unité", "Min", "Max", "Step"])
    sheet.append(["Diamètre", 6, "m", 4, 10, 0.5])
    sheet.append(["Surface", "=PI()*B2^2", "m²"])

    file_path = tmp_path / "calc.xlsx"
    workbook.save(file_path)

    rows = Receiver().receive_file(str(file_path))

    assert [row.label for row in rows] == ["Diamètre", "Surface"]
    assert rows[0].value == "6"
    assert rows[0].step == 0.5
    assert rows[1].value == "=PI()*B2^2"
    assert rows[1].unit == "m²"


def test_receiver_reads_named_sheet(tmp_path: Path):
    workbook = Workbook()
    workbook.active.title = "Notes"
    sheet = workbook.create_sheet("Calcul")
    sheet.append(["Label", "Valeur"])
    sheet.append(["Largeur", 2])

    file_path = tmp_path / "sheets.xlsx"
    workbook.save(file_path)

    rows = Receiver().receive_file(str(file_path), sheet_name="Calcul")

    assert [row.label for row in rows] == ["Largeur"]


def test_receiver_unknown_sheet(tmp_path: Path):
    workbook = Workbook()
    file_path = tmp_path / "one.xlsx"
    workbook.save(file_path)

    with pytest.raises(StageError) as exc:
        Receiver().receive_file(str(file_path), sheet_name="Missing")

    assert "Missing" in str(exc.value)


def test_receiver_unsupported_extension(tmp_path: Path):
    file_path = tmp_path / "table.pdf"
    file_path.write_text("x")

    with pytest.raises(StageError):
        Receiver().receive_file(str(file_path))


def test_receiver_missing_file(tmp_path: Path):
    with pytest.raises(StageError) as exc:
        Receiver().receive_file(str(tmp_path / "absent.tsv"))

    assert exc.value.stage == 0
