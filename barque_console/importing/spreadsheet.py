from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from barque_console.core.exceptions import ImportStructureError
from barque_console.core.records import (
    AFFILIATION_KEYS,
    IMMATRICULATION_KEYS,
    NAME_KEYS,
    VesselRecord,
    VesselStatus,
)
from barque_console.validation.row_validation import collect_row_issues, promote_row

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".xlsx", ".csv")

# Logical column -> accepted header spellings
REQUIRED_COLUMNS: Dict[str, Sequence[str]] = {
    "Nom de la barque": NAME_KEYS,
    "Affiliation": AFFILIATION_KEYS,
    "Immatriculation": IMMATRICULATION_KEYS,
}

# Data starts on the second spreadsheet line, under the header.
FIRST_DATA_ROW = 2


@dataclass(frozen=True)
class RowRejection:
    row_number: int
    messages: List[str]

    def render(self) -> str:
        return f"Ligne {self.row_number}: {', '.join(self.messages)}"


@dataclass
class ImportProgress:
    """Tracks how far a batch import has gone."""
    total: int = 0
    processed: int = 0

    @property
    def percent(self) -> int:
        if not self.total:
            return 0
        return round(self.processed / self.total * 100)

    def advance(self) -> None:
        self.processed += 1


@dataclass
class ImportReport:
    accepted: List[VesselRecord] = field(default_factory=list)
    rejected: List[RowRejection] = field(default_factory=list)
    progress: ImportProgress = field(default_factory=ImportProgress)

    @property
    def ok(self) -> bool:
        return not self.rejected

    def summary(self) -> str:
        return "\n".join(r.render() for r in self.rejected)


def _check_headers(columns: Iterable[Any], source: str) -> None:
    headers = {str(c).strip() for c in columns}
    if not headers:
        raise ImportStructureError(f"{source}: le fichier est vide ou mal formaté")

    missing = [
        logical
        for logical, spellings in REQUIRED_COLUMNS.items()
        if not any(s in headers for s in spellings)
    ]
    if missing:
        raise ImportStructureError(
            f"{source}: colonne(s) requise(s) manquante(s): {', '.join(missing)}. "
            "Format attendu: Affiliation, Immatriculation, Nom de la barque"
        )


def read_import_rows(path: Path | str, *, sheet: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Read a spreadsheet into raw import rows (one dict per data line).

    Cells are read as strings; empty cells come back as None.

    :raises ImportStructureError: unsupported file type, empty sheet or
        missing required columns.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ImportStructureError(
            f"Unsupported import file '{path.name}'. Only CSV and XLSX files are supported."
        )
    if not path.is_file():
        raise FileNotFoundError(f"Import file not found at {path}")

    logger.info("Reading import spreadsheet", extra={"path": str(path)})

    try:
        if suffix == ".xlsx":
            df = pd.read_excel(path, sheet_name=sheet or 0, dtype=str, engine="openpyxl")
        else:
            df = pd.read_csv(path, dtype=str, encoding="utf-8-sig")
    except pd.errors.EmptyDataError as e:
        raise ImportStructureError(f"{path.name}: le fichier est vide ou mal formaté") from e

    df.columns = [str(c).strip() for c in df.columns]
    _check_headers(df.columns, path.name)

    if df.empty:
        raise ImportStructureError(f"{path.name}: aucune donnée trouvée dans le fichier")

    df = df.astype(object).where(pd.notna(df), None)
    rows = df.to_dict(orient="records")

    logger.info("Import spreadsheet read", extra={"path": str(path), "n_rows": len(rows)})
    return rows


def import_rows(
        rows: Sequence[Mapping[str, Any]],
        *,
        default_status: str = VesselStatus.ACTIVE.value,
        max_rows: Optional[int] = None,
) -> ImportReport:
    """
    Validate every row and promote the acceptable ones.

    A rejected row never stops the batch; its violations are recorded with
    its spreadsheet line number.
    """
    if max_rows is not None and len(rows) > max_rows:
        raise ImportStructureError(
            f"Import has {len(rows)} rows, more than the configured maximum of {max_rows}"
        )

    report = ImportReport(progress=ImportProgress(total=len(rows)))

    for offset, row in enumerate(rows):
        issues = collect_row_issues(row)
        if issues:
            report.rejected.append(
                RowRejection(row_number=offset + FIRST_DATA_ROW, messages=[i.message for i in issues])
            )
        else:
            report.accepted.append(promote_row(row, default_status=default_status))
        report.progress.advance()

    logger.info(
        "Import rows validated",
        extra={"n_rows": len(rows), "n_accepted": len(report.accepted), "n_rejected": len(report.rejected)},
    )
    return report
