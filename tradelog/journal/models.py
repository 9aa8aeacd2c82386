"""
Trade record model.

`TradeRecord` is the validated form of what the AI service extracts
from a trade description.  It is built once per run and written to the
CSV journal straight away.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Union


Number = Union[int, float]


class Direction(str, Enum):
    """Position type of a trade."""
    LONG = "LONG"
    SHORT = "SHORT"


@dataclass
class TradeRecord:
    """Represents one journaled trade."""
    date: date
    symbol: str
    entry_price: Number
    exit_price: Number
    position_size: Number
    direction: Direction
    profit_loss: Number
    notes: str

    def to_dict(self) -> Dict[str, Any]:
        """Return the record in the JSON shape requested from the AI service."""
        return {
            'date': self.date.isoformat(),
            'symbol': self.symbol,
            'entryPrice': self.entry_price,
            'exitPrice': self.exit_price,
            'positionSize': self.position_size,
            'direction': self.direction.value,
            'profitLoss': self.profit_loss,
            'notes': self.notes,
        }
