"""
Exception types raised by the trade logging pipeline.

Every failure that ends an invocation derives from `TradeLogError`,
which lets the command-line entry point report them uniformly without
catching unrelated programming errors.
"""

from __future__ import annotations

from typing import List, Optional


class TradeLogError(Exception):
    """Base class for failures of a single trade logging run."""


class AIServiceError(TradeLogError):
    """The generative-AI call failed or returned no usable text."""


class ResponseParseError(TradeLogError):
    """The AI response did not contain a parseable JSON object."""


class TradeValidationError(TradeLogError):
    """The parsed object does not describe a valid trade.

    Attributes
    ----------
    errors : List[str]
        One human-readable message per problem found.
    """

    def __init__(self, errors: List[str], message: Optional[str] = None) -> None:
        self.errors = list(errors)
        if message is None:
            message = "Invalid trade data: " + "; ".join(self.errors)
        super().__init__(message)


class JournalWriteError(TradeLogError):
    """The CSV journal could not be created or appended to."""
