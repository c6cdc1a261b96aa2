from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Mapping

from barque_console.core.records import VesselRecord


class VesselSource(ABC):
    """
    Abstract interface for whatever supplies vessel records (REST backend, DB, fixtures).
    """

    @abstractmethod
    def fetch_all(self) -> List[VesselRecord]:
        pass


class InMemoryVesselSource(VesselSource):
    """
    Serves records from raw dicts held in memory. Accepts both the
    snake_case and the camelCase record shapes.
    """

    def __init__(self, raw_records: Iterable[Mapping[str, Any]] = ()):
        self.raw_records = list(raw_records)

    def fetch_all(self) -> List[VesselRecord]:
        return [VesselRecord.from_dict(r) for r in self.raw_records]
