from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from barque_console.core.exceptions import ImportStructureError
from barque_console.importing.spreadsheet import import_rows, read_import_rows
from barque_console.validation.row_validation import (
    MSG_IMMATRICULATION_FORMAT,
    MSG_NAME_REQUIRED,
)


def _write_csv(tmp_path: Path, text: str, name: str = "barques.csv") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_read_csv_rows_with_localized_headers(tmp_path):
    path = _write_csv(
        tmp_path,
        "Affiliation,Immatriculation,Nom de la barque,Port d'attache\n"
        "A1,10/1-001,Etoile,Casablanca\n"
        "A2,10/2-002,,Agadir\n",
    )

    rows = read_import_rows(path)

    assert len(rows) == 2
    assert rows[0]["Nom de la barque"] == "Etoile"
    # empty cell comes back as None, not NaN
    assert rows[1]["Nom de la barque"] is None


def test_read_keeps_leading_zeros_as_text(tmp_path):
    path = _write_csv(tmp_path, "affiliation,immatriculation,nomBarque\n007,10/3-0042,Soleil\n")
    rows = read_import_rows(path)
    assert rows[0]["affiliation"] == "007"
    assert rows[0]["immatriculation"] == "10/3-0042"


def test_missing_required_column_is_structure_error(tmp_path):
    path = _write_csv(tmp_path, "Affiliation,Nom de la barque\nA1,Etoile\n")
    with pytest.raises(ImportStructureError, match="Immatriculation"):
        read_import_rows(path)


def test_header_only_file_is_structure_error(tmp_path):
    path = _write_csv(tmp_path, "Affiliation,Immatriculation,Nom de la barque\n")
    with pytest.raises(ImportStructureError):
        read_import_rows(path)


def test_empty_file_is_structure_error(tmp_path):
    path = _write_csv(tmp_path, "")
    with pytest.raises(ImportStructureError):
        read_import_rows(path)


def test_unsupported_extension(tmp_path):
    path = _write_csv(tmp_path, "x", name="barques.txt")
    with pytest.raises(ImportStructureError):
        read_import_rows(path)


def test_read_xlsx(tmp_path):
    pytest.importorskip("openpyxl")
    path = tmp_path / "barques.xlsx"
    pd.DataFrame(
        {
            "Affiliation": ["A1"],
            "Immatriculation": ["10/4-77"],
            "Nom de Barque": ["Marée"],
        }
    ).to_excel(path, index=False)

    rows = read_import_rows(path)

    assert rows == [{"Affiliation": "A1", "Immatriculation": "10/4-77", "Nom de Barque": "Marée"}]


def test_import_rows_collects_rejections_without_stopping():
    rows = [
        {"affiliation": "X", "immatriculation": "10/2-7", "name": "Test"},
        {"affiliation": "X", "immatriculation": "11/2-7", "name": "Bad"},
        {"affiliation": "X", "immatriculation": "10/1-8"},
        {"affiliation": "Y", "immatriculation": "10/4-9", "nomBarque": "Ok"},
    ]

    report = import_rows(rows)

    assert [r.name for r in report.accepted] == ["Test", "Ok"]
    assert [(r.row_number, r.messages) for r in report.rejected] == [
        (3, [MSG_IMMATRICULATION_FORMAT]),
        (4, [MSG_NAME_REQUIRED]),
    ]
    assert not report.ok
    assert report.progress.processed == 4
    assert report.progress.percent == 100
    assert report.summary().splitlines()[0].startswith("Ligne 3: ")


def test_import_rows_respects_max_rows():
    rows = [{"affiliation": "X", "immatriculation": "10/2-7", "name": "T"}] * 3
    with pytest.raises(ImportStructureError):
        import_rows(rows, max_rows=2)


def test_import_rows_non_mapping_row_propagates():
    from barque_console.validation.errors import ValidationError

    with pytest.raises(ValidationError):
        import_rows([["not", "a", "row"]])
