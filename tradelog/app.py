"""
Application entry point.

This module defines the command-line interface: it takes a free-text
trade description, has the configured Gemini model extract the trade
fields and appends the result to the CSV journal.

Example::

    tradelog "Bought 100 shares of AAPL at 150, sold at 155, made good profit due to earnings report"
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .ai.client import GeminiClient
from .config.schema import load_config
from .errors import TradeLogError
from .pipeline import log_trade


EXAMPLE_DESCRIPTION = (
    "Bought 100 shares of AAPL at 150, sold at 155, made good profit due to earnings report"
)


def _setup_logging(verbose: bool) -> None:
    """Configure logging for the application."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tradelog",
        description="Extract a trade from a free-text description and append it to a CSV journal",
    )
    parser.add_argument('description', nargs='?', help="Free-text trade description")
    parser.add_argument('--config', default=None, help="Path to configuration YAML file")
    parser.add_argument('--csv', default=None, help="Path of the CSV journal (overrides config)")
    parser.add_argument('--model', default=None, help="Gemini model name (overrides config)")
    parser.add_argument('-v', '--verbose', action='store_true', help="Enable debug logging")
    return parser


def _print_usage(parser: argparse.ArgumentParser) -> None:
    parser.print_usage(sys.stdout)
    print("Please provide a trade description as a command line argument")
    print(f'Example: {parser.prog} "{EXAMPLE_DESCRIPTION}"')


def main(argv: Optional[List[str]] = None) -> int:
    """Parse command-line arguments and log one trade.

    Returns the process exit status: 0 on success, 1 when the
    description is missing or the trade could not be logged.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.description or not args.description.strip():
        _print_usage(parser)
        return 1

    _setup_logging(args.verbose)

    try:
        config = load_config(args.config)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if args.csv:
        config.journal.csv_path = args.csv
    if args.model:
        config.ai.model = args.model

    csv_path = Path(config.journal.csv_path).resolve()
    client = GeminiClient(config.ai)

    try:
        record = log_trade(args.description, client, csv_path)
    except TradeLogError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("Trade data successfully added to CSV!")
    print("\nProcessed Trade Data:")
    print(json.dumps(record.to_dict(), indent=2))
    print(f"\nData saved to: {csv_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
