"""Market snapshot collection.

Every instrument's change is measured the same way: the difference between
its two most recent daily closes. The snapshot is all-or-nothing; if any
instrument fails the caller gets the fixed placeholder instead of a partial
line.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Tuple

import requests

from daily_brief.config.settings import ALPHA_VANTAGE_URL, MARKET_INSTRUMENTS
from daily_brief.core.constants import MARKET_UNAVAILABLE
from daily_brief.core.errors import MarketDataError
from daily_brief.core.types import MarketQuote, MarketSnapshot
from daily_brief.logging_cfg.logger import setup_logger
from daily_brief.markets.providers import ProviderError, parse_daily_series
from daily_brief.utils.http import create_session

logger = setup_logger()

CENTS = Decimal('0.01')


def compute_change(previous_close: Decimal, latest_close: Decimal) -> Tuple[Decimal, Decimal]:
    """Return (change, change_percent) rounded to 2 places.

    Raises:
        MarketDataError: previous close is zero
    """
    previous_close = Decimal(previous_close)
    latest_close = Decimal(latest_close)
    if previous_close == 0:
        raise MarketDataError("Previous close is zero; percent change is undefined")

    change = latest_close - previous_close
    change_percent = change * 100 / previous_close
    return (
        change.quantize(CENTS, rounding=ROUND_HALF_UP),
        change_percent.quantize(CENTS, rounding=ROUND_HALF_UP),
    )


def fetch_quote(label: str, function: str, symbol: str, market, api_key: str,
                session=None, timeout: float = 20) -> MarketQuote:
    """Fetch one instrument's daily series and reduce it to a quote."""
    session = session or create_session()
    params = {'function': function, 'symbol': symbol, 'apikey': api_key}
    if market:
        params['market'] = market

    try:
        response = session.get(ALPHA_VANTAGE_URL, params=params, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.exceptions.RequestException as e:
        raise MarketDataError(f"Alpha Vantage request failed for {symbol}: {e}") from e
    except ValueError as e:
        raise MarketDataError(f"Alpha Vantage returned invalid JSON for {symbol}") from e

    result = parse_daily_series(payload)
    if isinstance(result, ProviderError):
        raise MarketDataError(f"Alpha Vantage {result.kind} for {symbol}: {result.message}")

    closes = result.latest_closes(2)
    if len(closes) < 2:
        raise MarketDataError(f"Insufficient data for {symbol} change calculation")

    (_, previous_close), (latest_date, latest_close) = closes
    logger.debug(f"Closes for {symbol}: latest={latest_close} ({latest_date}), previous={previous_close}")

    try:
        change, change_percent = compute_change(previous_close, latest_close)
    except InvalidOperation as e:
        raise MarketDataError(f"Non-numeric close for {symbol}") from e

    return MarketQuote(
        label=label,
        symbol=symbol,
        last_price=latest_close.quantize(CENTS, rounding=ROUND_HALF_UP),
        change=change,
        change_percent=change_percent,
    )


def collect_market_snapshot(settings, session=None) -> MarketSnapshot:
    """Fetch every tracked instrument, one request at a time.

    Requests go out one at a time on the single API key. The first failure
    stops the collection.

    Raises:
        MarketDataError: any instrument failed
        ConfigurationError: no Alpha Vantage key is configured
    """
    api_key = settings.require('alpha_vantage_api_key')
    session = session or create_session()

    quotes = tuple(
        fetch_quote(label, function, symbol, market, api_key, session, settings.http_timeout)
        for label, function, symbol, market in MARKET_INSTRUMENTS
    )

    return MarketSnapshot(quotes=quotes)


def fetch_market_snapshot(settings, session=None) -> str:
    """Rendered snapshot line, or the placeholder if any instrument failed."""
    try:
        snapshot = collect_market_snapshot(settings, session=session)
    except Exception as e:
        logger.error(f"Error fetching market data: {e}")
        return MARKET_UNAVAILABLE

    logger.info(f"Market snapshot built for {len(snapshot.quotes)} instruments")
    return snapshot.render()
