from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from barque_console.config.model import ConsoleConfig
from barque_console.core.exceptions import RecordContractError
from barque_console.core.records import VesselRecord, VesselStatus
from barque_console.core.store import VesselStore
from barque_console.importing.spreadsheet import ImportReport, import_rows, read_import_rows
from barque_console.services.source import VesselSource

logger = logging.getLogger(__name__)


class VesselService:
    """
    Write-side entry point for the vessel collection.

    Every mutation goes through the store; loading/error flags are kept
    in sync so views never observe an undefined status.
    """

    def __init__(
            self,
            store: VesselStore,
            source: Optional[VesselSource] = None,
            config: Optional[ConsoleConfig] = None,
    ):
        self.store = store
        self.source = source
        self.config = config or ConsoleConfig()

    def refresh(self) -> bool:
        """
        Reload the collection from the source.

        Returns False (and records the error on the store) when fetching fails.
        A source handing back non-records is a bug: the error is recorded and
        RecordContractError propagates.
        """
        if self.source is None:
            raise RuntimeError("VesselService.source must be set before refresh().")

        self.store.set_loading(True)
        try:
            records = self.source.fetch_all()
        except Exception as e:
            logger.exception("Failed to fetch vessels", extra={"source": type(self.source).__name__})
            self.store.load([])
            self.store.set_error(str(e) or "Failed to fetch barques")
            return False

        try:
            self.store.load(records)
        except RecordContractError as e:
            # load() is all-or-nothing, previous records are still in place
            logger.error(
                "Vessel source returned invalid records",
                extra={"source": type(self.source).__name__, "error": str(e)},
            )
            self.store.set_error(str(e))
            raise
        self.store.set_loading(False)
        logger.info("Vessels refreshed", extra={"n_records": len(records)})
        return True

    # -------------------------------------------------------------------------
    # Import
    # -------------------------------------------------------------------------
    def import_rows(self, rows: Sequence[Mapping[str, Any]]) -> ImportReport:
        """Validate rows and add the accepted ones to the store."""
        report = import_rows(
            rows,
            default_status=self.config.default_status,
            max_rows=self.config.max_import_rows,
        )
        if report.accepted:
            self.store.bulk_import(report.accepted)
        if report.rejected:
            logger.warning(
                "Import rows rejected",
                extra={"n_rejected": len(report.rejected), "rows": [r.row_number for r in report.rejected]},
            )
        return report

    def import_file(self, path: Path | str) -> ImportReport:
        rows = read_import_rows(path, sheet=self.config.import_sheet)
        return self.import_rows(rows)

    # -------------------------------------------------------------------------
    # Single-record edits
    # -------------------------------------------------------------------------
    def _require(self, barque_id: str) -> VesselRecord:
        record = self.store.get(barque_id)
        if record is None:
            raise KeyError(f"Unknown barque '{barque_id}'")
        return record

    def create(self, record: VesselRecord) -> VesselRecord:
        self.store.upsert(record)
        return record

    def update(self, barque_id: str, **changes: Any) -> VesselRecord:
        updated = self._require(barque_id).with_changes(**changes)
        self.store.upsert(updated)
        return updated

    def assign_gerant(self, barque_id: str, gerant_id: Optional[str]) -> VesselRecord:
        return self.update(barque_id, gerant_id=gerant_id or None)

    def update_status(self, barque_id: str, status: str) -> VesselRecord:
        status = VesselStatus(status).value
        return self.update(barque_id, status=status)

    def delete(self, barque_id: str) -> None:
        self.store.remove(barque_id)
