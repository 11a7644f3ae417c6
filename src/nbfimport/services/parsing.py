"""CSV row splitting and normalization into entries.

Pure functions; nothing here suspends or touches the bridge. The split is
deliberately naive: no quoting, escaping or multi-line fields.
"""

import math
import re

from nbfimport.schemas.entry import Entry

LINE_SEPARATOR = "\n"
FIELD_SEPARATOR = ","
BYTE_ORDER_MARK = "\ufeff"

# Longest leading decimal literal, e.g. "100usd" -> "100", "1.5e3x" -> "1.5e3"
LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def parse_rows(text: str) -> list[list[str]]:
    """
    Split text into rows of trimmed cells.

    Rows where every cell is empty are dropped; order follows the input lines.
    A leading byte order mark is ignored.
    """
    if text.startswith(BYTE_ORDER_MARK):
        text = text[len(BYTE_ORDER_MARK):]

    rows = []
    for line in text.split(LINE_SEPARATOR):
        row = [cell.strip() for cell in line.split(FIELD_SEPARATOR)]
        if any(row):
            rows.append(row)
    return rows


def parse_value(cell: str | None) -> float:
    """Parse the leading number of a cell. Anything unparseable is 0."""
    if not cell:
        return 0.0

    match = LEADING_NUMBER_RE.match(cell.strip())
    if not match:
        return 0.0

    try:
        value = float(match.group(0))
    except ValueError:
        return 0.0
    # float() overflows to inf for literals like 1e999
    return value if math.isfinite(value) else 0.0


def _cell(row: list[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def normalize(rows: list[list[str]]) -> list[Entry]:
    """
    Map rows to entries positionally: date, metric, value, unit.

    The first row is the header and is skipped. Short rows take defaults
    instead of being rejected.
    """
    return [
        Entry(
            date=_cell(row, 0),
            metric=_cell(row, 1),
            value=parse_value(_cell(row, 2)),
            unit=_cell(row, 3) or None,
        )
        for row in rows[1:]
    ]
