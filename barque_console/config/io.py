from __future__ import annotations

import json
import logging
from pathlib import Path

from barque_console.config.model import ConsoleConfig
from barque_console.core.exceptions import ConfigError
from barque_console.core.records import VesselStatus

logger = logging.getLogger(__name__)


def load_console_config(root: Path) -> ConsoleConfig:
    """
    Load configuration from `root/global.json`.

    Missing keys fall back to ConsoleConfig defaults.

    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if a value has the wrong type or is out of range.
    """
    root = Path(root)
    logger.info("Loading console config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    with global_path.open() as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{global_path} is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    defaults = ConsoleConfig()

    default_status = raw.get("default_status", defaults.default_status)
    try:
        default_status = VesselStatus(default_status).value
    except ValueError as e:
        raise ConfigError(f"default_status '{default_status}' is not a vessel status") from e

    max_rows = raw.get("max_import_rows", defaults.max_import_rows)
    if max_rows is not None:
        if isinstance(max_rows, bool) or not isinstance(max_rows, int) or max_rows < 1:
            raise ConfigError(f"max_import_rows must be a positive integer or null, got {max_rows!r}")

    return ConsoleConfig(
        ui_title=str(raw.get("ui_title", defaults.ui_title)),
        default_status=default_status,
        max_import_rows=max_rows,
        import_sheet=raw.get("import_sheet", defaults.import_sheet),
    )
