from __future__ import annotations

import json

import pytest

from barque_console.config import ConsoleConfig, load_console_config
from barque_console.core.exceptions import ConfigError


def test_load_console_config(tmp_path):
    (tmp_path / "global.json").write_text(
        json.dumps({"ui_title": "Flotte", "default_status": "inactive", "max_import_rows": 10, "import_sheet": "Barques"})
    )

    cfg = load_console_config(tmp_path)

    assert cfg == ConsoleConfig(ui_title="Flotte", default_status="inactive", max_import_rows=10, import_sheet="Barques")


def test_missing_keys_use_defaults(tmp_path):
    (tmp_path / "global.json").write_text("{}")
    assert load_console_config(tmp_path) == ConsoleConfig()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_console_config(tmp_path)


@pytest.mark.parametrize(
    "raw",
    [
        {"default_status": "sunk"},
        {"max_import_rows": 0},
        {"max_import_rows": "10"},
        [],
    ],
)
def test_invalid_values_are_config_errors(tmp_path, raw):
    (tmp_path / "global.json").write_text(json.dumps(raw))
    with pytest.raises(ConfigError):
        load_console_config(tmp_path)


def test_malformed_json(tmp_path):
    (tmp_path / "global.json").write_text("{not json")
    with pytest.raises(ConfigError):
        load_console_config(tmp_path)
