"""Built-in custom actions."""

from .csv import (
    CSV_EXPORT_ACTION_NAME,
    EMPTY_EXPORT_MESSAGE,
    create_csv_export_action,
    records_to_csv,
)

__all__ = [
    "CSV_EXPORT_ACTION_NAME",
    "EMPTY_EXPORT_MESSAGE",
    "create_csv_export_action",
    "records_to_csv",
]
