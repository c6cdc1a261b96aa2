"""
Spreadsheet import: reading raw rows and turning them into vessel records.
"""

from .spreadsheet import ImportProgress, ImportReport, RowRejection, import_rows, read_import_rows

__all__ = ["ImportProgress", "ImportReport", "RowRejection", "import_rows", "read_import_rows"]
