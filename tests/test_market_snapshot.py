"""Tests for market data validation and snapshot collection."""
import logging
import unittest
from decimal import Decimal
from unittest.mock import MagicMock

import requests

from daily_brief.config.settings import Settings
from daily_brief.core.constants import MARKET_UNAVAILABLE
from daily_brief.core.errors import MarketDataError
from daily_brief.markets.providers import DailySeries, ProviderError, parse_daily_series
from daily_brief.markets import snapshot as snapshot_module
from daily_brief.markets.snapshot import collect_market_snapshot, compute_change, fetch_market_snapshot


def equity_series(closes):
    return {
        "Meta Data": {"2. Symbol": "TEST"},
        "Time Series (Daily)": {date: {"1. open": "1.0", "4. close": close} for date, close in closes.items()},
    }


def crypto_series(closes):
    return {
        "Meta Data": {"2. Digital Currency Code": "BTC"},
        "Time Series (Digital Currency Daily)": {date: {"4. close": close} for date, close in closes.items()},
    }


GOOD_PAYLOADS = {
    "SPY": equity_series({"2026-10-14": "90.0000", "2026-10-15": "100.0000", "2026-10-16": "110.0000"}),
    "QQQ": equity_series({"2026-10-15": "450.0000", "2026-10-16": "440.0000"}),
    "BTC": crypto_series({"2026-10-16": "66000.00", "2026-10-17": "67000.50"}),
}


def make_session(payloads):
    """Session mock answering Alpha Vantage requests by symbol."""
    def get(url, params=None, timeout=None):
        payload = payloads[params["symbol"]]
        if isinstance(payload, Exception):
            raise payload
        response = MagicMock()
        response.raise_for_status.return_value = None
        response.json.return_value = payload
        return response

    session = MagicMock()
    session.get.side_effect = get
    return session


class TestComputeChange(unittest.TestCase):
    def test_ten_percent_gain(self):
        change, change_percent = compute_change(Decimal("100"), Decimal("110"))
        self.assertEqual(change, Decimal("10.00"))
        self.assertEqual(f"{change_percent:.2f}", "10.00")

    def test_loss_is_negative(self):
        change, change_percent = compute_change(Decimal("200"), Decimal("199.5"))
        self.assertEqual(change, Decimal("-0.50"))
        self.assertEqual(change_percent, Decimal("-0.25"))

    def test_rounds_half_up(self):
        _, change_percent = compute_change(Decimal("200"), Decimal("200.01"))
        self.assertEqual(change_percent, Decimal("0.01"))

    def test_zero_previous_close_raises(self):
        with self.assertRaises(MarketDataError):
            compute_change(Decimal("0"), Decimal("5"))


class TestParseDailySeries(unittest.TestCase):
    def test_equity_series(self):
        result = parse_daily_series(GOOD_PAYLOADS["SPY"])
        self.assertIsInstance(result, DailySeries)
        self.assertEqual(result.latest_closes(2), [("2026-10-15", Decimal("100.0000")), ("2026-10-16", Decimal("110.0000"))])

    def test_legacy_crypto_close_field(self):
        payload = {"Time Series (Digital Currency Daily)": {"2026-10-17": {"4a. close (USD)": "67000.5"}}}
        result = parse_daily_series(payload)
        self.assertIsInstance(result, DailySeries)
        self.assertEqual(result.latest_closes(2), [("2026-10-17", Decimal("67000.5"))])

    def test_error_shaped_payloads(self):
        cases = [
            ({"Error Message": "Invalid API call."}, "error"),
            ({"Note": "Thank you for using Alpha Vantage! Our standard API call frequency is..."}, "rate_limit"),
            ({"Information": "The demo API key is for demo purposes only."}, "information"),
            ({"Meta Data": {}}, "malformed"),
            ({"Time Series (Daily)": {"2026-10-16": {"4. close": "not a number"}}}, "malformed"),
            (["unexpected", "list"], "malformed"),
        ]
        for payload, kind in cases:
            with self.subTest(kind=kind, payload=payload):
                result = parse_daily_series(payload)
                self.assertIsInstance(result, ProviderError)
                self.assertEqual(result.kind, kind)


class TestMarketSnapshot(unittest.TestCase):
    def setUp(self):
        self.settings = Settings(alpha_vantage_api_key="test-key")

    def test_renders_all_instruments(self):
        snapshot = fetch_market_snapshot(self.settings, session=make_session(GOOD_PAYLOADS))

        self.assertEqual(
            snapshot,
            "Market snapshot: S&P 500 (via SPY): $110.00 (10.00%), "
            "Nasdaq (via QQQ): $440.00 (-2.22%), "
            "Bitcoin: $67000.50 (1.52%)"
        )

    def test_structured_snapshot(self):
        snapshot = collect_market_snapshot(self.settings, session=make_session(GOOD_PAYLOADS))

        self.assertEqual([quote.symbol for quote in snapshot.quotes], ["SPY", "QQQ", "BTC"])
        self.assertEqual(snapshot.quotes[0].change, Decimal("10.00"))
        self.assertEqual(snapshot.quotes[0].change_percent, Decimal("10.00"))

    def test_requests_send_api_key_and_market(self):
        session = make_session(GOOD_PAYLOADS)
        fetch_market_snapshot(self.settings, session=session)

        params = [call.kwargs["params"] for call in session.get.call_args_list]
        self.assertTrue(all(p["apikey"] == "test-key" for p in params))
        btc = next(p for p in params if p["symbol"] == "BTC")
        self.assertEqual(btc["function"], "DIGITAL_CURRENCY_DAILY")
        self.assertEqual(btc["market"], "USD")

    def test_one_provider_error_fails_whole_snapshot(self):
        payloads = dict(GOOD_PAYLOADS, QQQ={"Note": "API call frequency exceeded"})
        self.assertEqual(fetch_market_snapshot(self.settings, session=make_session(payloads)), MARKET_UNAVAILABLE)

    def test_one_transport_error_fails_whole_snapshot(self):
        payloads = dict(GOOD_PAYLOADS, BTC=requests.exceptions.ConnectionError("down"))
        self.assertEqual(fetch_market_snapshot(self.settings, session=make_session(payloads)), MARKET_UNAVAILABLE)

    def test_zero_previous_close_uses_placeholder(self):
        payloads = dict(GOOD_PAYLOADS, SPY=equity_series({"2026-10-15": "0", "2026-10-16": "110"}))
        self.assertEqual(fetch_market_snapshot(self.settings, session=make_session(payloads)), MARKET_UNAVAILABLE)

    def test_single_observation_uses_placeholder(self):
        payloads = dict(GOOD_PAYLOADS, SPY=equity_series({"2026-10-16": "110"}))
        self.assertEqual(fetch_market_snapshot(self.settings, session=make_session(payloads)), MARKET_UNAVAILABLE)

    def test_collect_raises_on_failure(self):
        payloads = dict(GOOD_PAYLOADS, SPY={"Error Message": "Invalid API call."})
        with self.assertRaises(MarketDataError):
            collect_market_snapshot(self.settings, session=make_session(payloads))

    def test_instruments_are_requested_one_at_a_time(self):
        in_flight = []
        peak = []
        session = make_session(GOOD_PAYLOADS)
        answer = session.get.side_effect

        def tracked_get(url, params=None, timeout=None):
            in_flight.append(params["symbol"])
            peak.append(len(in_flight))
            try:
                return answer(url, params=params, timeout=timeout)
            finally:
                in_flight.pop()

        session.get.side_effect = tracked_get
        collect_market_snapshot(self.settings, session=session)

        self.assertEqual([call.kwargs["params"]["symbol"] for call in session.get.call_args_list], ["SPY", "QQQ", "BTC"])
        self.assertEqual(max(peak), 1)

    def test_throttled_instrument_stops_collection(self):
        payloads = dict(GOOD_PAYLOADS, SPY={"Information": "Please consider spreading out your free API requests."})
        session = make_session(payloads)

        self.assertEqual(fetch_market_snapshot(self.settings, session=session), MARKET_UNAVAILABLE)
        self.assertEqual(session.get.call_count, 1)

    def test_uses_package_logger(self):
        self.assertIs(snapshot_module.logger, logging.getLogger('daily_brief'))

    def test_missing_api_key_uses_placeholder(self):
        session = make_session(GOOD_PAYLOADS)
        self.assertEqual(fetch_market_snapshot(Settings(), session=session), MARKET_UNAVAILABLE)
        session.get.assert_not_called()


if __name__ == '__main__':
    unittest.main()
