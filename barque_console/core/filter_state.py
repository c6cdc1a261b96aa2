from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Mapping

from barque_console.core.exceptions import CriteriaContractError


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class FilterCriteria:
    """
    Represents the current filter applied to the vessel list.

    Fields:

    - search: Case-insensitive term matched against name or immatriculation.
    - port: Exact home port.
    - status: Exact vessel status.
    - gerant_id: Exact responsible-party reference.

    "" on any field means "do not constrain on this field". None is never stored.
    """

    search: str = ""
    port: str = ""
    status: str = ""
    gerant_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FilterCriteria:
        if not isinstance(data, Mapping):
            raise CriteriaContractError(
                f"Filter criteria must be a mapping, got {type(data).__name__}"
            )
        search = data.get("search")
        if search is None:
            search = data.get("searchTerm")
        gerant_id = data.get("gerant_id")
        if gerant_id is None:
            gerant_id = data.get("gerantId")

        return cls(
            search=_as_str(search).strip(),
            port=_as_str(data.get("port")),
            status=_as_str(data.get("status")),
            gerant_id=_as_str(gerant_id),
        )

    @classmethod
    def coerce(cls, value: Any) -> FilterCriteria:
        if isinstance(value, FilterCriteria):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        raise CriteriaContractError(
            f"Expected FilterCriteria or mapping, got {type(value).__name__}"
        )

    def merged(self, **changes: Any) -> FilterCriteria:
        """Partial update; unknown field names are a caller bug."""
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise CriteriaContractError(f"Unknown filter fields: {sorted(unknown)}")
        return replace(self, **{k: _as_str(v) for k, v in changes.items()})

    def active_fields(self) -> List[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]

    @property
    def is_empty(self) -> bool:
        return not self.active_fields()
