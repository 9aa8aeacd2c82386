"""
CSV trade journal.

The journal is an append-only CSV file with a fixed eight column
header.  Only the free-text notes column is quoted; the other columns
come from a validated `TradeRecord` (ISO date, delimiter-free symbol,
numbers and the direction enum) and are written as-is.

There is no locking: two processes appending at the same time may
interleave their writes or both create the header.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import List, Union

from ..errors import JournalWriteError
from .models import Number, TradeRecord


logger = logging.getLogger(__name__)

CSV_HEADERS: List[str] = [
    'Date',
    'Symbol',
    'Entry Price',
    'Exit Price',
    'Position Size',
    'Direction',
    'Profit/Loss',
    'Notes',
]

PathLike = Union[str, Path]


def initialize_csv(path: PathLike) -> bool:
    """Create the journal with its header row if it does not exist yet.

    Returns
    -------
    bool
        `True` if the file was created, `False` if it already existed.
    """
    file_path = Path(path)
    if file_path.exists():
        return False
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with file_path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(",".join(CSV_HEADERS) + "\n")
    except OSError as exc:
        raise JournalWriteError(f"Cannot create trade journal {file_path}: {exc}") from exc
    logger.info("Created trade journal %s", file_path)
    return True


def _format_number(value: Number) -> str:
    """Render a number the way a JSON producer would: `150`, `0.000001`, `1e-7`.

    Floats use positional notation for decimal exponents from -6 to 20
    and exponent notation without zero padding outside that range.
    """
    if not isinstance(value, float):
        return str(value)
    text = repr(value)
    mantissa, _, exponent = text.partition("e")
    exp = int(exponent) if exponent else 0
    if not -7 < exp < 21:
        return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"
    positional = format(Decimal(text), "f")
    if "." in positional:
        positional = positional.rstrip("0").rstrip(".")
    return positional


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def format_row(record: TradeRecord) -> str:
    """Serialise a trade into one CSV line (without the line terminator)."""
    fields = [
        record.date.isoformat(),
        record.symbol,
        _format_number(record.entry_price),
        _format_number(record.exit_price),
        _format_number(record.position_size),
        record.direction.value,
        _format_number(record.profit_loss),
        _quote(record.notes),
    ]
    return ",".join(fields)


def append_trade(path: PathLike, record: TradeRecord) -> None:
    """Append one trade row to the journal."""
    file_path = Path(path)
    try:
        with file_path.open("a", encoding="utf-8", newline="") as fh:
            fh.write(format_row(record) + "\n")
    except OSError as exc:
        raise JournalWriteError(f"Cannot append to trade journal {file_path}: {exc}") from exc
    logger.debug("Appended %s trade on %s to %s", record.symbol, record.date, file_path)
