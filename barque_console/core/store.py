from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from barque_console.core.exceptions import RecordContractError
from barque_console.core.filter_state import FilterCriteria
from barque_console.core.records import VesselRecord, now_iso

logger = logging.getLogger(__name__)


def _require_record(record: object) -> VesselRecord:
    if not isinstance(record, VesselRecord):
        raise RecordContractError(
            f"Expected VesselRecord, got {type(record).__name__}"
        )
    return record


class VesselStore:
    """
    Authoritative, de-duplicated collection of vessel records.

    Holds:
    - records keyed by id (dict keeps insertion order)
    - loading / error flags, defaulting to False / None
    - the list of known ports (metadata for filter dropdowns)
    - the current FilterCriteria

    `version` is bumped on every record mutation; selectors key their
    caches on it instead of comparing collections.
    """

    def __init__(self) -> None:
        self._records: Dict[str, VesselRecord] = {}
        self._ports: List[str] = []
        self._criteria = FilterCriteria()
        self._version = 0
        self._items_cache: Optional[Tuple[int, Tuple[VesselRecord, ...]]] = None

        self.loading: bool = False
        self.error: Optional[str] = None
        self.last_updated: Optional[str] = None

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------
    @property
    def version(self) -> int:
        return self._version

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def ports(self) -> List[str]:
        return list(self._ports)

    @property
    def items(self) -> Tuple[VesselRecord, ...]:
        """Snapshot of the records in insertion order (same object until the next mutation)."""
        if self._items_cache is None or self._items_cache[0] != self._version:
            self._items_cache = (self._version, tuple(self._records.values()))
        return self._items_cache[1]

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def get(self, record_id: str) -> Optional[VesselRecord]:
        return self._records.get(record_id)

    # -------------------------------------------------------------------------
    # Record mutations
    # -------------------------------------------------------------------------
    def _touch(self) -> None:
        self._version += 1
        self.last_updated = now_iso()

    def _remember_port(self, port: str) -> None:
        if port and port not in self._ports:
            self._ports.append(port)

    def load(self, records: Iterable[VesselRecord]) -> None:
        """
        Replace the whole collection.

        Duplicate ids: the last occurrence wins, at the position of the first.
        """
        by_id: Dict[str, VesselRecord] = {}
        n_input = 0
        for record in records:
            record = _require_record(record)
            by_id[record.id] = record
            n_input += 1

        self._records = by_id
        self._ports = []
        for record in by_id.values():
            self._remember_port(record.port)

        self.error = None
        self._touch()

        if n_input != len(by_id):
            logger.warning(
                "Duplicate vessel ids collapsed on load",
                extra={"n_input": n_input, "n_records": len(by_id)},
            )
        logger.debug("Vessel store loaded", extra={"n_records": len(by_id), "version": self._version})

    def upsert(self, record: VesselRecord) -> None:
        record = _require_record(record)
        is_update = record.id in self._records
        self._records[record.id] = record
        self._remember_port(record.port)
        self._touch()
        logger.debug(
            "Vessel upserted",
            extra={"vessel_id": record.id, "is_update": is_update, "version": self._version},
        )

    def bulk_import(self, records: Iterable[VesselRecord]) -> int:
        """
        Upsert many records at once. Returns the number of records applied.

        The batch is checked as a whole first: on a bad item nothing is written.
        """
        batch = [_require_record(record) for record in records]
        for record in batch:
            self._records[record.id] = record
            self._remember_port(record.port)
        n = len(batch)
        if n:
            self._touch()
        logger.debug("Vessels bulk-imported", extra={"n_records": n, "version": self._version})
        return n

    def remove(self, record_id: str) -> None:
        if self._records.pop(record_id, None) is None:
            return
        self._touch()
        logger.debug("Vessel removed", extra={"vessel_id": record_id, "version": self._version})

    # -------------------------------------------------------------------------
    # Status flags and metadata
    # -------------------------------------------------------------------------
    def set_loading(self, loading: bool) -> None:
        self.loading = bool(loading)
        if self.loading:
            self.error = None

    def set_error(self, message: Optional[str]) -> None:
        self.error = message
        self.loading = False

    def set_ports(self, ports: Optional[Iterable[str]]) -> None:
        self._ports = list(dict.fromkeys(p for p in (ports or []) if p))

    # -------------------------------------------------------------------------
    # Filter criteria
    # -------------------------------------------------------------------------
    def set_criteria(self, criteria: FilterCriteria) -> None:
        self._criteria = FilterCriteria.coerce(criteria)

    def set_filter(self, **changes: str) -> FilterCriteria:
        self._criteria = self._criteria.merged(**changes)
        return self._criteria

    def clear_filters(self) -> None:
        self._criteria = FilterCriteria()

    def reset(self) -> None:
        self._records = {}
        self._ports = []
        self._criteria = FilterCriteria()
        self.loading = False
        self.error = None
        self.last_updated = None
        self._version += 1
