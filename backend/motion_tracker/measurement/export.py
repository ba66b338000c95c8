"""
CSV export of the derived table.

RFC 4180 style: fields containing a comma, quote or line break are quoted
with internal quotes doubled, None becomes an empty field, and numbers keep
their natural string form (no rounding). Lines are joined with "\\n" and
there is no trailing newline.
"""

import csv
import io
import re
from typing import Any, Iterable, List, Mapping, Sequence

from motion_tracker.measurement.coordinates import ScaleUnit
from motion_tracker.measurement.table import DerivedRow, TableColumn

# Columns of the table export, in order
EXPORT_COLUMNS = [
    TableColumn.TIME,
    TableColumn.WORLD_X,
    TableColumn.WORLD_Y,
    TableColumn.VX,
    TableColumn.VY,
    TableColumn.SPEED,
    TableColumn.AX,
    TableColumn.AY,
]


def generate_csv(data: Iterable[Mapping[str, Any]], columns: Sequence[str]) -> str:
    """Header line plus one line per mapping, columns in the given order."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(columns)
    for row in data:
        values = [row.get(column) for column in columns]
        if values in ([None], [""]):
            # csv.writer quotes a lone empty field; an empty line is wanted here
            buffer.write("\n")
        else:
            writer.writerow(values)
    # Drop only the terminator of the last line so trailing empty rows survive
    return buffer.getvalue()[:-1]


def table_to_csv(rows: Iterable[DerivedRow], unit: ScaleUnit) -> str:
    """Export derived rows with unit-labelled headers."""
    headers: List[str] = ["#"] + [column.label(unit) for column in EXPORT_COLUMNS]

    data = []
    for row in rows:
        record = {"#": row.row_number}
        for column, header in zip(EXPORT_COLUMNS, headers[1:]):
            record[header] = getattr(row, column.value)
        data.append(record)

    return generate_csv(data, headers)


def export_filename(project_name: str) -> str:
    return f"{re.sub(r'[^a-zA-Z0-9]', '-', project_name)}-motion-data.csv"
