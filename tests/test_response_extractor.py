import os
import sys

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from tradelog.errors import ResponseParseError, TradeValidationError
from tradelog.extraction.extractor import extract_json, parse_trade_response

import unittest


EMBEDDED = (
    'Here is the data: {"date":"2024-01-01","symbol":"AAPL","entryPrice":150,'
    '"exitPrice":155,"positionSize":100,"direction":"LONG","profitLoss":500,"notes":"earnings"}'
)


class TestExtractJson(unittest.TestCase):
    def test_direct_parse(self) -> None:
        result = extract_json('{"symbol": "MSFT"}')
        self.assertTrue(result.ok)
        self.assertEqual(result.strategy, "direct")
        self.assertEqual(result.payload, {"symbol": "MSFT"})

    def test_fallback_recovers_embedded_object(self) -> None:
        result = extract_json(EMBEDDED)
        self.assertTrue(result.ok)
        self.assertEqual(result.strategy, "fallback")
        self.assertEqual(result.payload["symbol"], "AAPL")
        self.assertEqual(result.payload["profitLoss"], 500)

    def test_fallback_handles_markdown_fence(self) -> None:
        text = '```json\n{\n  "symbol": "EURUSD",\n  "notes": "a {nested} brace"\n}\n```'
        result = extract_json(text)
        self.assertEqual(result.strategy, "fallback")
        self.assertEqual(result.payload["notes"], "a {nested} brace")

    def test_no_braces_fails(self) -> None:
        result = extract_json("I could not find any trade in that text.")
        self.assertFalse(result.ok)
        self.assertIsNone(result.payload)
        self.assertIn("no JSON object", result.error)

    def test_malformed_embedded_object_fails(self) -> None:
        result = extract_json("result: {symbol: AAPL}")
        self.assertFalse(result.ok)
        self.assertIn("malformed", result.error)

    def test_json_array_is_not_an_object(self) -> None:
        result = extract_json('[1, 2, 3]')
        self.assertFalse(result.ok)


class TestParseTradeResponse(unittest.TestCase):
    def test_nan_and_infinity_literals_are_rejected(self) -> None:
        for literal in ("NaN", "Infinity", "-Infinity"):
            text = EMBEDDED.replace('"entryPrice":150', f'"entryPrice":{literal}')
            with self.subTest(literal=literal):
                with self.assertRaises(TradeValidationError) as ctx:
                    parse_trade_response(text)
                self.assertIn("entryPrice", ctx.exception.errors[0])

    def test_embedded_response_becomes_record(self) -> None:
        record = parse_trade_response(EMBEDDED)
        self.assertEqual(record.symbol, "AAPL")
        self.assertEqual(record.date.isoformat(), "2024-01-01")
        self.assertEqual(record.notes, "earnings")

    def test_unparseable_response_raises_parse_error(self) -> None:
        with self.assertRaises(ResponseParseError):
            parse_trade_response("no json here")

    def test_wrong_shape_raises_validation_error(self) -> None:
        with self.assertRaises(TradeValidationError) as ctx:
            parse_trade_response('{"ticker": "AAPL"}')
        self.assertTrue(any("missing fields" in e for e in ctx.exception.errors))


if __name__ == '__main__':
    unittest.main()
