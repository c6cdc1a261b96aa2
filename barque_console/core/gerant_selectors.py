from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from barque_console.core.records import Gerant, GerantStatus
from barque_console.core.selectors import LastValueCache


class GerantSelectors:
    """
    Read-only views over the list of responsible parties (gérants).

    The list is replaced wholesale through `set_gerants`; every call bumps
    an internal version so cached projections are recomputed once.
    """

    def __init__(self, gerants: Optional[Iterable[Gerant]] = None) -> None:
        self._gerants: Tuple[Gerant, ...] = ()
        self._version = 0
        self._filter_cache: LastValueCache[Tuple[Gerant, ...]] = LastValueCache()
        self._statuses_cache: LastValueCache[List[str]] = LastValueCache()
        self._stats_cache: LastValueCache[Dict[str, int]] = LastValueCache()
        self.set_gerants(gerants or [])

    def set_gerants(self, gerants: Iterable[Gerant]) -> None:
        by_id: Dict[str, Gerant] = {}
        for g in gerants:
            by_id[g.id] = g
        self._gerants = tuple(by_id.values())
        self._version += 1

    def select_all(self) -> Tuple[Gerant, ...]:
        return self._gerants

    def select_filtered(self, search: str = "", status: str = "") -> Tuple[Gerant, ...]:
        search = (search or "").strip()
        status = status or ""

        def compute() -> Tuple[Gerant, ...]:
            term = search.casefold()
            out = []
            for g in self._gerants:
                if term and term not in g.display_name.casefold() and term not in g.email.casefold():
                    continue
                if status and g.status != status:
                    continue
                out.append(g)
            return tuple(out)

        return self._filter_cache.get_or_compute((self._version, search, status), compute)

    def select_by_id(self, gerant_id: str) -> Optional[Gerant]:
        return next((g for g in self._gerants if g.id == gerant_id), None)

    def select_by_barque(self, barque_id: str) -> List[Gerant]:
        return [g for g in self._gerants if barque_id in g.assigned_barques]

    def select_statuses(self) -> List[str]:
        return self._statuses_cache.get_or_compute(
            self._version, lambda: sorted({g.status for g in self._gerants})
        )

    def select_stats(self) -> Dict[str, int]:
        def compute() -> Dict[str, int]:
            return {
                "total": len(self._gerants),
                "active": sum(1 for g in self._gerants if g.status == GerantStatus.ACTIVE.value),
                "inactive": sum(1 for g in self._gerants if g.status == GerantStatus.INACTIVE.value),
                "with_barques": sum(1 for g in self._gerants if g.assigned_barques),
            }

        return self._stats_cache.get_or_compute(self._version, compute)
