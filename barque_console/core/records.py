from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from barque_console.core.exceptions import RecordContractError


class VesselStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class GerantStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


# -------------------------------------------------------------------------
# Accepted key spellings per logical field, in priority order.
# Spreadsheet headers are human-edited, backend payloads use camelCase.
# -------------------------------------------------------------------------
NAME_KEYS: Tuple[str, ...] = ("nomBarque", "Nom de la barque", "Nom de Barque", "name")
AFFILIATION_KEYS: Tuple[str, ...] = ("affiliation", "Affiliation")
IMMATRICULATION_KEYS: Tuple[str, ...] = ("immatriculation", "Immatriculation")
PORT_KEYS: Tuple[str, ...] = ("portAttache", "Port d'attache", "port")
GERANT_KEYS: Tuple[str, ...] = ("gerant_id", "gerantId")
STATUS_KEYS: Tuple[str, ...] = ("status",)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def clean_value(value: Any) -> str:
    """
    Stringify a raw cell value. None, NaN and whitespace-only strings
    all collapse to "".
    """
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def lookup(row: Mapping[str, Any], keys: Sequence[str]) -> str:
    """Return the first non-empty value found under `keys`, or ""."""
    for key in keys:
        value = clean_value(row.get(key))
        if value:
            return value
    return ""


def lookup_raw(row: Mapping[str, Any], keys: Sequence[str]) -> str:
    """
    Like `lookup` but without stripping: only None, NaN and "" count as
    absent, so "  " or " 10/2-3" come back as written.
    """
    for key in keys:
        value = row.get(key)
        if value is None or (isinstance(value, float) and math.isnan(value)):
            continue
        value = str(value)
        if value:
            return value
    return ""


@dataclass(frozen=True)
class VesselRecord:
    """
    A registered boat ("barque").

    :param id: unique identifier within the collection
    :param name: display name (nomBarque)
    :param immatriculation: registration code, e.g. 10/2-345
    :param port: home port (portAttache)
    :param affiliation: affiliation / owner code
    :param status: one of VesselStatus values
    :param gerant_id: responsible party reference, None when unassigned
    """
    id: str
    name: str
    immatriculation: str = ""
    port: str = ""
    affiliation: str = ""
    status: str = VesselStatus.ACTIVE.value
    gerant_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_changes(self, **changes: Any) -> VesselRecord:
        changes.setdefault("updated_at", now_iso())
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VesselRecord:
        """
        Build a record from either the canonical snake_case shape or the
        camelCase backend shape (nomBarque / portAttache / gerantId / isActive).
        """
        if not isinstance(data, Mapping):
            raise RecordContractError(
                f"Vessel record must be a mapping, got {type(data).__name__}"
            )

        record_id = clean_value(data.get("id"))
        if not record_id:
            raise RecordContractError("Vessel record has no 'id'")

        status = lookup(data, STATUS_KEYS)
        if not status and "isActive" in data:
            status = (VesselStatus.ACTIVE if data["isActive"] else VesselStatus.INACTIVE).value

        return cls(
            id=record_id,
            name=lookup(data, NAME_KEYS),
            immatriculation=lookup(data, IMMATRICULATION_KEYS),
            port=lookup(data, PORT_KEYS),
            affiliation=lookup(data, AFFILIATION_KEYS),
            status=status or VesselStatus.ACTIVE.value,
            gerant_id=lookup(data, GERANT_KEYS) or None,
            created_at=data.get("created_at") or data.get("createdAt"),
            updated_at=data.get("updated_at") or data.get("updatedAt"),
        )


@dataclass
class Gerant:
    """Responsible party for one or more barques."""
    id: str
    nom: str
    prenom: str = ""
    email: str = ""
    telephone: str = ""
    status: str = GerantStatus.ACTIVE.value
    assigned_barques: List[str] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return f"{self.prenom} {self.nom}".strip()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Gerant:
        if not isinstance(data, Mapping):
            raise RecordContractError(
                f"Gerant must be a mapping, got {type(data).__name__}"
            )
        gerant_id = clean_value(data.get("id"))
        if not gerant_id:
            raise RecordContractError("Gerant has no 'id'")
        return cls(
            id=gerant_id,
            nom=clean_value(data.get("nom")),
            prenom=clean_value(data.get("prenom")),
            email=clean_value(data.get("email")),
            telephone=clean_value(data.get("telephone")),
            status=clean_value(data.get("status")) or GerantStatus.ACTIVE.value,
            assigned_barques=[str(b) for b in (data.get("assignedBarques") or data.get("assigned_barques") or [])],
        )
