from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Callable, Dict, FrozenSet, Generic, Hashable, List, Optional, Tuple, TypeVar

from barque_console.core.exceptions import StoreNotInitialisedError
from barque_console.core.filter_state import FilterCriteria
from barque_console.core.records import VesselRecord
from barque_console.core.store import VesselStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LastValueCache(Generic[T]):
    """
    Holds the last computed value and the key it was computed for.
    A lookup with an equal key returns the very same object.
    """

    def __init__(self) -> None:
        self._key: Optional[Hashable] = None
        self._value: Optional[T] = None
        self._filled = False

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        if self._filled and self._key == key:
            return self._value  # type: ignore[return-value]
        value = compute()
        self._key = key
        self._value = value
        self._filled = True
        return value

    def clear(self) -> None:
        self._key = None
        self._value = None
        self._filled = False


def matches_search(record: VesselRecord, term: str) -> bool:
    if not term:
        return True
    term = term.casefold()
    return term in record.name.casefold() or term in record.immatriculation.casefold()


def matches_criteria(record: VesselRecord, criteria: FilterCriteria) -> bool:
    """All active predicates ANDed; an empty field matches everything."""
    if not matches_search(record, criteria.search):
        return False
    if criteria.port and record.port != criteria.port:
        return False
    if criteria.status and record.status != criteria.status:
        return False
    if criteria.gerant_id and record.gerant_id != criteria.gerant_id:
        return False
    return True


class VesselSelectors:
    """
    Memoized read-only views over a VesselStore.

    Caches are keyed on store.version (bumped by every record mutation)
    and, for filtered views, on the FilterCriteria value.
    """

    MAX_FILTER_CACHE = 64

    def __init__(self, store: Optional[VesselStore]) -> None:
        self._store = store

        self._filter_cache: Dict[FilterCriteria, Tuple[VesselRecord, ...]] = {}
        self._filter_cache_version: Optional[int] = None

        self._index_cache: LastValueCache[Dict[str, VesselRecord]] = LastValueCache()
        self._ports_cache: LastValueCache[FrozenSet[str]] = LastValueCache()
        self._status_cache: LastValueCache[Dict[str, int]] = LastValueCache()

    @property
    def store(self) -> VesselStore:
        if self._store is None:
            raise StoreNotInitialisedError("VesselSelectors has no VesselStore attached")
        return self._store

    # -------------------------------------------------------------------------
    # Collection views
    # -------------------------------------------------------------------------
    def select_all(self) -> Tuple[VesselRecord, ...]:
        return self.store.items

    def select_filtered(self, criteria: Any = None) -> Tuple[VesselRecord, ...]:
        """
        Records satisfying every active predicate of `criteria`
        (defaults to the store's current criteria), in insertion order.
        """
        store = self.store
        criteria = store.criteria if criteria is None else FilterCriteria.coerce(criteria)

        if self._filter_cache_version != store.version:
            self._filter_cache.clear()
            self._filter_cache_version = store.version

        cached = self._filter_cache.get(criteria)
        if cached is not None:
            return cached

        items = store.items
        if criteria.is_empty:
            result = items
        else:
            result = tuple(r for r in items if matches_criteria(r, criteria))

        logger.debug(
            "Filtered view recomputed",
            extra={
                "active_fields": criteria.active_fields(),
                "n_in": len(items),
                "n_out": len(result),
                "version": store.version,
            },
        )

        # Prevent unbounded growth
        if len(self._filter_cache) >= self.MAX_FILTER_CACHE:
            self._filter_cache.clear()
        self._filter_cache[criteria] = result
        return result

    def select_by_id(self, record_id: str) -> Optional[VesselRecord]:
        store = self.store
        index = self._index_cache.get_or_compute(
            store.version, lambda: {r.id: r for r in store.items}
        )
        return index.get(record_id)

    def select_ports(self) -> FrozenSet[str]:
        """Distinct non-empty home ports present in the collection."""
        store = self.store
        return self._ports_cache.get_or_compute(
            store.version, lambda: frozenset(r.port for r in store.items if r.port)
        )

    def select_known_ports(self) -> List[str]:
        return sorted(self.store.ports)

    def select_status_counts(self) -> Dict[str, int]:
        store = self.store
        return self._status_cache.get_or_compute(
            store.version, lambda: dict(Counter(r.status for r in store.items))
        )

    # -------------------------------------------------------------------------
    # Scalars
    # -------------------------------------------------------------------------
    def select_count(self) -> int:
        return len(self.select_all())

    def select_filtered_count(self, criteria: Any = None) -> int:
        return len(self.select_filtered(criteria))

    def select_loading(self) -> bool:
        return self.store.loading

    def select_error(self) -> Optional[str]:
        return self.store.error

    def select_criteria(self) -> FilterCriteria:
        return self.store.criteria
