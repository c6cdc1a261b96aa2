"""
Core domain layer: vessel records, filter criteria, the collection store
and the memoized views derived from it
"""

from .exceptions import BarqueConsoleError
from .records import Gerant, GerantStatus, VesselRecord, VesselStatus
from .filter_state import FilterCriteria
from .store import VesselStore
from .selectors import VesselSelectors
from .gerant_selectors import GerantSelectors

__all__ = [
    "BarqueConsoleError",
    "FilterCriteria",
    "Gerant",
    "GerantSelectors",
    "GerantStatus",
    "VesselRecord",
    "VesselSelectors",
    "VesselStatus",
    "VesselStore",
]
