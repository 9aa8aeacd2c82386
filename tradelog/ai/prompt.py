"""
Prompt construction for trade extraction.

The prompt asks the model for a single JSON object with a fixed set of
keys.  Today's date is included so the model can honour the "use
today's date" instruction, which it has no other way of knowing.
"""

from __future__ import annotations

from datetime import date
from typing import Optional


PROMPT_TEMPLATE = """\
Extract trading information from the following description and return it as a JSON object.
Only return the JSON object, nothing else.
Use this exact format:
{{
    "date": "YYYY-MM-DD",
    "symbol": "TICKER",
    "entryPrice": number,
    "exitPrice": number,
    "positionSize": number,
    "direction": "LONG" or "SHORT",
    "profitLoss": number,
    "notes": "string"
}}
Use today's date if no date is specified. Today's date is {today}.

Trade description: {description}"""


def build_prompt(description: str, today: Optional[date] = None) -> str:
    """Return the extraction prompt for a trade description.

    Parameters
    ----------
    description : str
        Free-text trade description supplied by the user.  It is embedded
        verbatim.
    today : datetime.date, optional
        Date substituted for "today".  Defaults to `date.today()`.
    """
    if today is None:
        today = date.today()
    return PROMPT_TEMPLATE.format(today=today.isoformat(), description=description)
