from __future__ import annotations

import pytest

from barque_console.core.records import VesselStatus
from barque_console.validation.errors import ValidationError
from barque_console.validation.row_validation import (
    MSG_AFFILIATION_REQUIRED,
    MSG_IMMATRICULATION_FORMAT,
    MSG_IMMATRICULATION_REQUIRED,
    MSG_NAME_REQUIRED,
    collect_row_issues,
    promote_row,
    validate_import_row,
)


def _row(**overrides):
    row = {"affiliation": "X", "immatriculation": "10/2-7", "name": "Test"}
    row.update(overrides)
    return row


def test_valid_row_has_no_violations():
    assert validate_import_row(_row()) == []


@pytest.mark.parametrize("name_key", ["nomBarque", "Nom de la barque", "Nom de Barque", "name"])
def test_any_name_spelling_is_accepted(name_key):
    row = {"affiliation": "X", "immatriculation": "10/1-1", name_key: "Etoile"}
    assert validate_import_row(row) == []


def test_missing_name_under_every_spelling_reports_only_name_required():
    row = {
        "affiliation": "X",
        "immatriculation": "10/3-12",
        "nomBarque": "",
        "Nom de la barque": "   ",
        "name": None,
    }
    assert validate_import_row(row) == [MSG_NAME_REQUIRED]


def test_all_rules_fire_in_order():
    assert validate_import_row({}) == [
        MSG_NAME_REQUIRED,
        MSG_AFFILIATION_REQUIRED,
        MSG_IMMATRICULATION_REQUIRED,
    ]

    row = {"immatriculation": "11/2-345"}
    assert validate_import_row(row) == [
        MSG_NAME_REQUIRED,
        MSG_AFFILIATION_REQUIRED,
        MSG_IMMATRICULATION_FORMAT,
    ]


@pytest.mark.parametrize("code", ["10/2-345", "10/1-0", "10/4-99999"])
def test_well_formed_immatriculation_has_no_format_violation(code):
    assert MSG_IMMATRICULATION_FORMAT not in validate_import_row(_row(immatriculation=code))


@pytest.mark.parametrize(
    "code",
    [
        "11/2-345", "10/5-1", "10/0-1", "10/2-", "10/2-12a", "abc", "10/23-4",
        " 10/2-345", "10/2-345 ", "   ", "10/2-345\n",
        "10/2-١٢٣",
    ],
)
def test_malformed_immatriculation_reports_format_only(code):
    assert validate_import_row(_row(immatriculation=code)) == [MSG_IMMATRICULATION_FORMAT]


def test_empty_immatriculation_is_required_not_format():
    assert validate_import_row(_row(immatriculation="")) == [MSG_IMMATRICULATION_REQUIRED]
    assert validate_import_row(_row(immatriculation=None)) == [MSG_IMMATRICULATION_REQUIRED]
    assert validate_import_row(_row(immatriculation=float("nan"))) == [MSG_IMMATRICULATION_REQUIRED]


def test_whitespace_immatriculation_is_present_but_malformed():
    assert validate_import_row(_row(immatriculation="   ")) == [MSG_IMMATRICULATION_FORMAT]
    assert validate_import_row(_row(immatriculation="10/2-345 ")) == [MSG_IMMATRICULATION_FORMAT]


def test_immatriculation_digits_must_be_ascii():
    assert validate_import_row(_row(immatriculation="10/2-١٢٣")) == [MSG_IMMATRICULATION_FORMAT]
    assert validate_import_row(_row(immatriculation="10/2-123\n")) == [MSG_IMMATRICULATION_FORMAT]


def test_nan_cells_count_as_missing():
    row = _row(affiliation=float("nan"))
    assert validate_import_row(row) == [MSG_AFFILIATION_REQUIRED]


def test_issues_carry_stable_codes():
    codes = [i.code for i in collect_row_issues({"immatriculation": "bad"})]
    assert codes == ["ROW_NAME_REQUIRED", "ROW_AFFILIATION_REQUIRED", "ROW_IMMATRICULATION_FORMAT"]


@pytest.mark.parametrize("bad", [None, "row", 42, ["affiliation", "X"]])
def test_non_mapping_row_raises_validation_error(bad):
    with pytest.raises(ValidationError) as exc:
        validate_import_row(bad)
    assert exc.value.issues[0].code == "ROW_TYPE"


def test_promote_row_builds_active_record():
    rec = promote_row(_row(), record_id="r1")
    assert rec.id == "r1"
    assert rec.name == "Test"
    assert rec.immatriculation == "10/2-7"
    assert rec.affiliation == "X"
    # no port column: affiliation is used as home port
    assert rec.port == "X"
    assert rec.status == VesselStatus.ACTIVE.value
    assert rec.gerant_id is None


def test_promote_row_reads_port_column_and_generates_id():
    rec = promote_row(_row(**{"Port d'attache": "Agadir"}))
    assert rec.port == "Agadir"
    assert rec.id


def test_promote_row_rejects_invalid_row():
    with pytest.raises(ValidationError) as exc:
        promote_row(_row(immatriculation="11/2-345"))
    assert exc.value.messages == [MSG_IMMATRICULATION_FORMAT]
