"""Gemini public (unauthenticated) REST endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .client import GeminiClient
from .payload import expand_path
from .results import Ok, Result

SYMBOLS = "/v1/symbols"
SYMBOL_DETAILS = "/v1/symbols/details/:symbol"
NETWORK = "/v1/network/:token"
TICKER = "/v1/pubticker/:symbol"
TICKER_V2 = "/v2/ticker/:symbol"
CANDLES = "/v2/candles/:symbol/:time_frame"
DERIVATIVES_CANDLES = "/v2/derivatives/candles/:symbol/:time_frame"
FEE_PROMOS = "/v1/feepromos"
ORDER_BOOK = "/v1/book/:symbol"
TRADE_HISTORY = "/v1/trades/:symbol"
PRICE_FEED = "/v1/pricefeed"
FUNDING_AMOUNT = "/v1/fundingamount/:symbol"


@dataclass(frozen=True)
class PublicApi:
    """Market data endpoints; no credentials needed."""

    client: GeminiClient

    def symbols(self) -> Result:
        """All symbols available for trading."""
        return self.client.public_get(SYMBOLS)

    def symbol_details(self, symbol: str) -> Result:
        return self.client.public_get(expand_path(SYMBOL_DETAILS, symbol=symbol))

    def network(self, token: str) -> Result:
        """Networks a token can be moved on, e.g. ``rbn`` -> ``["ethereum"]``."""
        return self.client.public_get(expand_path(NETWORK, token=token))

    def ticker(self, symbol: str) -> Result:
        return self.client.public_get(expand_path(TICKER, symbol=symbol))

    def ticker_v2(self, symbol: str) -> Result:
        return self.client.public_get(expand_path(TICKER_V2, symbol=symbol))

    def candles(self, symbol: str, time_frame: str) -> Result:
        """Candles for ``time_frame`` (1m, 5m, 15m, 30m, 1hr, 6hr, 1day)."""
        return self.client.public_get(expand_path(CANDLES, symbol=symbol, time_frame=time_frame))

    def derivatives_candles(self, symbol: str, time_frame: str) -> Result:
        return self.client.public_get(
            expand_path(DERIVATIVES_CANDLES, symbol=symbol, time_frame=time_frame)
        )

    def fee_promos(self) -> Result:
        return self.client.public_get(FEE_PROMOS)

    def current_order_book(self, symbol: str, limit_bids: int = 50, limit_asks: int = 50) -> Result:
        return self.client.public_get(
            expand_path(ORDER_BOOK, symbol=symbol),
            {"limit_bids": limit_bids, "limit_asks": limit_asks},
        )

    def trade_history(
        self,
        symbol: str,
        timestamp: Optional[int] = None,
        since_tid: Optional[int] = None,
        limit_trades: int = 50,
        include_breaks: bool = False,
    ) -> Result:
        """Recent trades, optionally only those after ``timestamp`` or ``since_tid``."""
        return self.client.public_get(
            expand_path(TRADE_HISTORY, symbol=symbol),
            {
                "timestamp": timestamp,
                "since_tid": since_tid,
                "limit_trades": limit_trades,
                "include_breaks": include_breaks,
            },
        )

    def price_feed(self) -> Result:
        return self.client.public_get(PRICE_FEED)

    def funding_amount(self, symbol: str) -> Result:
        return self.client.public_get(expand_path(FUNDING_AMOUNT, symbol=symbol))


def summarize_symbols(result: Result) -> List[str]:
    """Upper-cased symbol list from a :meth:`PublicApi.symbols` result."""
    if not isinstance(result, Ok) or not isinstance(result.body, list):
        return []
    return [str(symbol).upper() for symbol in result.body]


__all__ = ["PublicApi", "summarize_symbols"]
