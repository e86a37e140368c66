"""CSV export of admin records.

Output is semicolon-delimited, prefixed with a UTF-8 byte order mark so
spreadsheet applications pick the right encoding. The header row comes from
the keys of the first record.
"""

import csv
import io
from datetime import date
from typing import Any, Mapping, Optional, Sequence

CSV_DELIMITER = ";"
UTF8_BOM = "\ufeff"
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def records_to_csv(records: Sequence[Mapping[str, Any]], delimiter: str = CSV_DELIMITER) -> str:
    """Serialize records to CSV text, BOM included. Empty input gives an empty string."""
    if not records:
        return ""
    
    headers = list(records[0].keys())
    buffer = io.StringIO()
    writer = csv.writer(
        buffer,
        delimiter=delimiter,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writerow(headers)
    for record in records:
        writer.writerow([_cell(record.get(header)) for header in headers])
    
    return UTF8_BOM + buffer.getvalue().rstrip("\n")


def csv_filename(category: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"imeliq_{category}_{today.isoformat()}.csv"


def content_disposition(filename: str) -> str:
    return f"attachment; filename={filename}"
