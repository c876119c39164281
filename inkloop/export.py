import logging
import math
import os
from typing import Callable, List, Mapping, Optional, Sequence, Union

import pandas as pd

from inkloop.errors import EmptyInput, ExportFailed, ShapeMismatch

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_FILENAME = "inkloop_data.csv"
PARTNER_EXPORT_FILENAME = "inkloop_partners.csv"
CSV_MIME = "text/csv"

Rows = Union[pd.DataFrame, Sequence[Mapping]]


def _records(rows: Rows) -> List[Mapping]:
    if isinstance(rows, pd.DataFrame):
        return rows.to_dict("records")
    return list(rows)


def _stringify(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def _header(records: List[Mapping], fields: Optional[Sequence[str]]) -> List[str]:
    header = list(fields) if fields is not None else list(records[0].keys())
    expected = set(header)
    for idx, record in enumerate(records):
        if set(record.keys()) != expected:
            raise ShapeMismatch(
                f"Row {idx} has keys {sorted(map(str, record.keys()))}, expected {sorted(map(str, header))}"
            )
    return header


def rows_to_csv(rows: Rows, fields: Optional[Sequence[str]] = None, quote: bool = False) -> str:
    """Serialise uniform rows to comma-separated text, header first.

    With ``quote=False`` values are joined as-is, so embedded commas or
    quotes are not escaped. ``quote=True`` applies RFC 4180 quoting.
    """
    records = _records(rows)
    if not records:
        raise EmptyInput("Cannot derive a CSV header from zero rows")
    header = _header(records, fields)
    values = [[_stringify(record[key]) for key in header] for record in records]

    if quote:
        frame = pd.DataFrame(values, columns=[str(key) for key in header])
        return frame.to_csv(index=False, lineterminator="\n").rstrip("\n")

    lines = [",".join(str(key) for key in header)]
    lines.extend(",".join(row) for row in values)
    return "\n".join(lines)


def save_to_disk(text: str, filename: str, output_dir: str = ".") -> str:
    path = os.path.join(output_dir, filename)
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(text)
    return path


def export_csv(
    rows: Rows,
    filename: str = DEFAULT_EXPORT_FILENAME,
    saver: Optional[Callable[[str, str], object]] = None,
    fields: Optional[Sequence[str]] = None,
    quote: bool = False,
) -> str:
    """Serialise ``rows`` and hand the text to ``saver(text, filename)``."""
    text = rows_to_csv(rows, fields=fields, quote=quote)
    saver = saver or save_to_disk
    try:
        saver(text, filename)
    except Exception as exc:
        logger.error("Export of %s failed: %s", filename, exc)
        raise ExportFailed(f"Could not save {filename}: {exc}") from exc
    logger.info("Exported %s (%d lines)", filename, text.count("\n"))
    return text
