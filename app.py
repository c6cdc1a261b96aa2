import os
import sys
from pathlib import Path

from barque_console.config import ConsoleConfig, load_console_config
from barque_console.core import FilterCriteria, VesselSelectors, VesselStore
from barque_console.logging_config import configure_logging
from barque_console.services.vessel_service import VesselService

configure_logging()


def load_config() -> ConsoleConfig:
    """Reads global.json from BARQUE_CONSOLE_CONFIG_ROOT if it exists, else defaults."""
    root = Path(os.getenv("BARQUE_CONSOLE_CONFIG_ROOT", "config"))
    if not (root / "global.json").is_file():
        return ConsoleConfig()
    return load_console_config(root)


def main(argv: list[str]) -> int:
    if not argv:
        print("usage: python app.py <barques.xlsx|barques.csv> [search]")
        return 2

    config = load_config()
    store = VesselStore()
    service = VesselService(store, config=config)
    views = VesselSelectors(store)

    report = service.import_file(argv[0])
    if not report.ok:
        print("Erreurs de validation:")
        print(report.summary())

    criteria = FilterCriteria(search=argv[1] if len(argv) > 1 else "")
    for record in views.select_filtered(criteria):
        print(f"{record.immatriculation:<12} {record.name:<30} {record.port}")

    print(f"{views.select_filtered_count(criteria)} / {views.select_count()} barques")
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
