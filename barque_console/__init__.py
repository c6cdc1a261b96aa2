"""
Top-level package for the barque administration console.

This package exposes the console's data layer (records, store, derived views)
and the import pipeline that feeds it.
Most code should import from submodules such as:
    barque_console.core
    barque_console.validation
    barque_console.importing
    barque_console.services
"""

__all__: list[str] = []
