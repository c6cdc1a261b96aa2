from __future__ import annotations

import re
import uuid
from typing import Any, Mapping, Optional

from barque_console.core.records import (
    AFFILIATION_KEYS,
    IMMATRICULATION_KEYS,
    NAME_KEYS,
    PORT_KEYS,
    VesselRecord,
    VesselStatus,
    lookup,
    lookup_raw,
    now_iso,
)
from barque_console.validation.errors import ValidationError, ValidationIssue

IMMATRICULATION_PATTERN = re.compile(r"10/[1-4]-[0-9]+")

MSG_NAME_REQUIRED = "Le nom de la barque est obligatoire"
MSG_AFFILIATION_REQUIRED = "L'affiliation est obligatoire"
MSG_IMMATRICULATION_REQUIRED = "L'immatriculation est obligatoire"
MSG_IMMATRICULATION_FORMAT = "Format d'immatriculation invalide (doit être de la forme 10/X-XXX)"


def _require_mapping(row: Any) -> Mapping[str, Any]:
    if not isinstance(row, Mapping):
        raise ValidationError(
            [ValidationIssue("ROW_TYPE", f"Import row must be a key/value mapping, got {type(row).__name__}.")]
        )
    return row


def collect_row_issues(row: Any) -> list[ValidationIssue]:
    """
    Run every row rule and return all issues, in rule order.

    Data problems are returned, never raised. Only a row that is not a
    mapping at all raises ValidationError.
    """
    row = _require_mapping(row)
    issues: list[ValidationIssue] = []

    if not lookup(row, NAME_KEYS):
        issues.append(ValidationIssue("ROW_NAME_REQUIRED", MSG_NAME_REQUIRED))

    if not lookup(row, AFFILIATION_KEYS):
        issues.append(ValidationIssue("ROW_AFFILIATION_REQUIRED", MSG_AFFILIATION_REQUIRED))

    # Not stripped: whitespace around the code is a format violation
    immatriculation = lookup_raw(row, IMMATRICULATION_KEYS)
    if not immatriculation:
        issues.append(ValidationIssue("ROW_IMMATRICULATION_REQUIRED", MSG_IMMATRICULATION_REQUIRED))
    elif not IMMATRICULATION_PATTERN.fullmatch(immatriculation):
        issues.append(ValidationIssue("ROW_IMMATRICULATION_FORMAT", MSG_IMMATRICULATION_FORMAT))

    return issues


def validate_import_row(row: Any) -> list[str]:
    """Human-readable violations for one import row; [] means acceptable."""
    return [issue.message for issue in collect_row_issues(row)]


def promote_row(
        row: Mapping[str, Any],
        *,
        record_id: Optional[str] = None,
        default_status: str = VesselStatus.ACTIVE.value,
) -> VesselRecord:
    """
    Turn an accepted import row into a VesselRecord.

    Rows without a port column take the affiliation as home port, which is
    how the spreadsheets are filled in practice.
    """
    issues = collect_row_issues(row)
    if issues:
        raise ValidationError(issues)

    affiliation = lookup(row, AFFILIATION_KEYS)
    stamp = now_iso()
    return VesselRecord(
        id=record_id or uuid.uuid4().hex,
        name=lookup(row, NAME_KEYS),
        immatriculation=lookup(row, IMMATRICULATION_KEYS),
        port=lookup(row, PORT_KEYS) or affiliation,
        affiliation=affiliation,
        status=default_status,
        created_at=stamp,
        updated_at=stamp,
    )
