"""Notable coin price changes from the exchange's public API."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

import requests

from saedori.models import ChangeInfo, Market, Ticker

logger = logging.getLogger(__name__)

UPBIT_URL = "https://api.upbit.com/v1/market/all"
UPBIT_TICKER_URL = "https://api.upbit.com/v1/ticker?markets="
KRW_PREFIX = "KRW-"
CHANGE_THRESHOLD = 3
MAX_CHANGES = 3
REQUEST_TIMEOUT = 30


def _get_list(url: str) -> list:
    response = requests.get(url, timeout=REQUEST_TIMEOUT)
    data = response.json()
    if not isinstance(data, list):
        raise ValueError(f"unexpected payload from {url}")
    return data


def fetch_markets() -> list[Market]:
    """Return every market the exchange lists."""
    return [
        Market(market=item.get("market", ""), korean_name=item.get("korean_name", ""))
        for item in _get_list(UPBIT_URL)
    ]


def filter_krw_markets(markets: Iterable[Market]) -> tuple[dict[str, str], list[str]]:
    """Return the Korean names by market code and the codes of the won markets."""
    krw = [market for market in markets if market.market.startswith(KRW_PREFIX)]
    return {m.market: m.korean_name for m in krw}, [m.market for m in krw]


def fetch_tickers(krw_markets: Iterable[str]) -> list[Ticker]:
    """Return the current change rate of each given market."""
    url = UPBIT_TICKER_URL + ",".join(krw_markets)
    return [
        Ticker(
            market=item.get("market", ""),
            signed_change_rate=float(item.get("signed_change_rate", 0.0)),
        )
        for item in _get_list(url)
    ]


def calculate_changes(
    tickers: Iterable[Ticker], market_map: Mapping[str, str]
) -> list[ChangeInfo]:
    """Return the up to three largest moves beyond three percent either way."""
    changes = []
    for ticker in tickers:
        rate = ticker.signed_change_rate * 100
        if rate > CHANGE_THRESHOLD or rate < -CHANGE_THRESHOLD:
            changes.append(
                ChangeInfo(
                    symbol=ticker.market.removeprefix(KRW_PREFIX),
                    korean_name=market_map.get(ticker.market, ""),
                    change_rate=rate,
                )
            )
    changes.sort(key=lambda change: abs(change.change_rate), reverse=True)
    return changes[:MAX_CHANGES]


def format_changes(changes: Iterable[ChangeInfo]) -> list[str]:
    """Describe each change as a surge or a plunge, truncated to one decimal."""
    formatted = []
    for change in changes:
        kind = "급락" if change.change_rate < 0 else "급등"
        rate = int(change.change_rate * 10) / 10.0
        formatted.append(f"{change.korean_name} {change.symbol} {kind} ({rate:.1f}%)")
    return formatted


def get_coin_change_rate() -> list[str]:
    """Return descriptions of today's largest won-market moves."""
    market_map, krw_markets = filter_krw_markets(fetch_markets())
    tickers = fetch_tickers(krw_markets)
    return format_changes(calculate_changes(tickers, market_map))


class CoinScheduler:
    """Keyword source for coin price moves."""

    def get_coin_change_rate(self) -> list[str]:
        return get_coin_change_rate()