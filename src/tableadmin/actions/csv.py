"""
CSV export collection action.

Example::

    resource = define_resource(
        posts,
        collection_actions=[create_csv_export_action(posts)],
    )
"""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from typing import Any

from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from tableadmin.database import Database, Record
from tableadmin.dialects import get_table_sql_name
from tableadmin.specs.resource import CollectionAction

CSV_EXPORT_ACTION_NAME = "Export CSV"
EMPTY_EXPORT_MESSAGE = "No records to export"


def records_to_csv(records: Sequence[Record]) -> str:
    """Header row from the first record's keys, then one row per record.

    ``None`` becomes an empty cell; values holding commas, quotes or
    newlines are quoted.
    """
    if not records:
        return ""
    headers = list(records[0])
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for record in records:
        writer.writerow(record.get(header) for header in headers)
    return buffer.getvalue().removesuffix("\n")


def create_csv_export_action(table: Any) -> CollectionAction:
    """Collection action downloading every record of ``table`` as ``<table>.csv``."""
    table_name = get_table_sql_name(table)

    def export_csv(request: Request, database: Database) -> Response:
        records = database.select(table)
        if not records:
            return PlainTextResponse(EMPTY_EXPORT_MESSAGE)
        return Response(
            records_to_csv(records),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{table_name}.csv"'},
        )

    return CollectionAction(name=CSV_EXPORT_ACTION_NAME, handler=export_csv)
