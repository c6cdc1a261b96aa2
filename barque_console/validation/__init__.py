"""
Row-level validation for spreadsheet imports.
"""

from .errors import ValidationError, ValidationIssue
from .row_validation import collect_row_issues, promote_row, validate_import_row

__all__ = [
    "ValidationError",
    "ValidationIssue",
    "collect_row_issues",
    "promote_row",
    "validate_import_row",
]
