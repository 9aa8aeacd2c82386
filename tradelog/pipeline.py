"""
Trade logging pipeline.

Ties the steps together: build the prompt, call the model, extract and
validate the trade, append it to the journal.  The journal header is
ensured before the model is called; the data row is only written once
the response has been parsed and validated, so a failed run never
leaves a partial row behind.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional, Union

from .ai.prompt import build_prompt
from .extraction.extractor import parse_trade_response
from .journal.csv_log import append_trade, initialize_csv
from .journal.models import TradeRecord


logger = logging.getLogger(__name__)


def process_trade(description: str, client, today: Optional[date] = None) -> TradeRecord:
    """Turn a trade description into a validated `TradeRecord`.

    Parameters
    ----------
    description : str
        Free-text trade description.
    client
        Object exposing ``generate(prompt) -> str``, normally a
        `GeminiClient`.
    today : datetime.date, optional
        Date the model should assume when the description has none.
    """
    prompt = build_prompt(description, today=today)
    text = client.generate(prompt)
    logger.debug("AI response: %s", text)
    return parse_trade_response(text)


def add_trade_to_csv(csv_path: Union[str, Path], record: TradeRecord) -> None:
    """Append a validated trade to the journal at `csv_path`."""
    append_trade(csv_path, record)


def log_trade(
    description: str,
    client,
    csv_path: Union[str, Path],
    today: Optional[date] = None,
) -> TradeRecord:
    """Run the whole pipeline for one description and return the stored trade."""
    initialize_csv(csv_path)

    logger.info("Processing trade data...")
    record = process_trade(description, client, today=today)

    add_trade_to_csv(csv_path, record)
    logger.info("Trade data successfully added to CSV")
    return record
