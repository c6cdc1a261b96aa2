from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from barque_console.core.records import VesselStatus


@dataclass
class ConsoleConfig:
    """
    Global settings read from global.json.

    - ui_title: title shown by the rendering layer
    - default_status: status given to vessels created by an import
    - max_import_rows: reject spreadsheets longer than this (None = no limit)
    - import_sheet: sheet name to read from .xlsx files (None = first sheet)
    """
    ui_title: str = "Gestion des barques"
    default_status: str = VesselStatus.ACTIVE.value
    max_import_rows: Optional[int] = 5000
    import_sheet: Optional[str] = None
