"""
Extraction of trade data from free-form model output.

Model replies are supposed to be a bare JSON object but frequently come
wrapped in prose or Markdown fences.  Extraction therefore runs in two
stages:

1. parse the whole text as JSON;
2. failing that, parse the span from the first ``{`` to the last ``}``.

`extract_json()` reports the outcome as an `ExtractionResult` instead of
raising, so each stage can be tested on its own.  `validate_trade()`
then turns the parsed object into either a `TradeRecord` or a
`ValidationFailure` listing every problem found.  `parse_trade_response()`
chains both and raises on failure, which is what the pipeline uses.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from ..errors import ResponseParseError, TradeValidationError
from ..journal.models import Direction, TradeRecord


JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

REQUIRED_KEYS: List[str] = [
    'date',
    'symbol',
    'entryPrice',
    'exitPrice',
    'positionSize',
    'direction',
    'profitLoss',
    'notes',
]

NUMERIC_KEYS: List[str] = ['entryPrice', 'exitPrice', 'positionSize', 'profitLoss']

# Characters that would break the unquoted Symbol column.
_SYMBOL_FORBIDDEN = (',', '"', '\r', '\n')


@dataclass
class ExtractionResult:
    """Outcome of `extract_json()`.

    Attributes
    ----------
    payload : dict or None
        The parsed JSON object, `None` on failure.
    strategy : str or None
        ``"direct"`` or ``"fallback"`` depending on which stage succeeded.
    error : str or None
        Reason for failure, `None` on success.
    """

    payload: Optional[Dict[str, Any]] = None
    strategy: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


@dataclass
class ValidationFailure:
    """Returned by `validate_trade()` when the object is not a valid trade."""

    errors: List[str] = field(default_factory=list)
    payload: Optional[Dict[str, Any]] = None


def _loads_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        value = json.loads(text)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def extract_json(text: str) -> ExtractionResult:
    """Recover a JSON object from model output."""
    payload = _loads_object(text)
    if payload is not None:
        return ExtractionResult(payload=payload, strategy="direct")

    match = JSON_OBJECT_PATTERN.search(text)
    if match is None:
        return ExtractionResult(error="no JSON object found in AI response")

    payload = _loads_object(match.group(0))
    if payload is not None:
        return ExtractionResult(payload=payload, strategy="fallback")
    return ExtractionResult(error="embedded JSON object in AI response is malformed")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def validate_trade(payload: Dict[str, Any]) -> Union[TradeRecord, ValidationFailure]:
    """Check a parsed object against the trade shape.

    All eight keys must be present; extra keys are ignored.  Problems are
    collected rather than reported one at a time.
    """
    errors: List[str] = []

    missing = [key for key in REQUIRED_KEYS if key not in payload]
    if missing:
        errors.append(f"missing fields: {missing}")

    trade_date = None
    if 'date' in payload:
        raw_date = payload['date']
        try:
            trade_date = datetime.strptime(str(raw_date).strip(), "%Y-%m-%d").date()
        except ValueError:
            errors.append(f"date is not in YYYY-MM-DD format: {raw_date!r}")

    symbol = payload.get('symbol')
    if 'symbol' in payload:
        if not isinstance(symbol, str) or not symbol.strip():
            errors.append(f"symbol must be a non-empty string: {symbol!r}")
        elif any(ch in symbol for ch in _SYMBOL_FORBIDDEN):
            errors.append(f"symbol contains a delimiter or quote: {symbol!r}")
        else:
            symbol = symbol.strip()

    for key in NUMERIC_KEYS:
        if key in payload and not _is_number(payload[key]):
            errors.append(f"{key} must be a number: {payload[key]!r}")

    direction = None
    if 'direction' in payload:
        raw_direction = payload['direction']
        try:
            direction = Direction(str(raw_direction).strip().upper())
        except ValueError:
            errors.append(f"direction must be LONG or SHORT: {raw_direction!r}")

    notes = payload.get('notes')
    if 'notes' in payload and not isinstance(notes, str):
        errors.append(f"notes must be a string: {notes!r}")

    if errors:
        return ValidationFailure(errors=errors, payload=payload)

    return TradeRecord(
        date=trade_date,
        symbol=symbol,
        entry_price=payload['entryPrice'],
        exit_price=payload['exitPrice'],
        position_size=payload['positionSize'],
        direction=direction,
        profit_loss=payload['profitLoss'],
        notes=notes,
    )


def parse_trade_response(text: str) -> TradeRecord:
    """Extract and validate a trade from model output.

    Raises
    ------
    ResponseParseError
        If neither extraction stage yields a JSON object.
    TradeValidationError
        If the object is not a valid trade.
    """
    extracted = extract_json(text)
    if not extracted.ok:
        raise ResponseParseError(f"Failed to parse AI response as JSON: {extracted.error}")

    result = validate_trade(extracted.payload)
    if isinstance(result, ValidationFailure):
        raise TradeValidationError(result.errors)
    return result
