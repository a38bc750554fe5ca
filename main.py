"""Gemini REST command-line entry point."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT / "src"))

from gemini_rest.client import GeminiClient  # noqa: E402
from gemini_rest.config import load_client_config  # noqa: E402
from gemini_rest.errors import ConfigurationError  # noqa: E402
from gemini_rest.private import PrivateApi  # noqa: E402
from gemini_rest.public import PublicApi, summarize_symbols  # noqa: E402
from gemini_rest.results import ApiError, Ok, Result, TransportError  # noqa: E402


def _pretty_print(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2, default=str))


def _render(result: Result) -> int:
    if isinstance(result, Ok):
        _pretty_print(result.body)
        return 0
    if isinstance(result, ApiError):
        _pretty_print({"status": result.status, "error": result.body})
        return 1
    if isinstance(result, TransportError):
        _pretty_print({"transport_error": result.reason})
    return 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Gemini REST API client")
    parser.add_argument(
        "--env",
        dest="environment",
        default=None,
        help="sandbox or production (defaults to GEMINI_ENVIRONMENT)",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    parser.add_argument("--verbose", action="store_true", help="Log requests at DEBUG level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("symbols", help="List tradable symbols")

    ticker_parser = subparsers.add_parser("ticker", help="Fetch ticker")
    ticker_parser.add_argument("symbol", help="Symbol, e.g. btcusd")

    book_parser = subparsers.add_parser("book", help="Fetch order book")
    book_parser.add_argument("symbol", help="Symbol, e.g. btcusd")
    book_parser.add_argument("--limit-bids", type=int, default=50, help="Bid levels")
    book_parser.add_argument("--limit-asks", type=int, default=50, help="Ask levels")

    trades_parser = subparsers.add_parser("trades", help="Fetch recent trades")
    trades_parser.add_argument("symbol", help="Symbol, e.g. btcusd")
    trades_parser.add_argument("--limit", type=int, default=50, help="Trade limit")

    balances_parser = subparsers.add_parser("balances", help="Available balances (private)")
    balances_parser.add_argument("--account", default=None, help="Sub-account name")

    orders_parser = subparsers.add_parser("orders", help="Active orders (private)")
    orders_parser.add_argument("--account", default=None, help="Sub-account name")

    subparsers.add_parser("heartbeat", help="Send a session heartbeat (private)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    settings = {"environment": args.environment, "timeout": args.timeout}
    try:
        client = GeminiClient.from_config(load_client_config(settings))
    except ConfigurationError as exc:
        parser.error(str(exc))

    with client:
        public = PublicApi(client)
        private = PrivateApi(client)

        if args.command == "symbols":
            result = public.symbols()
            if isinstance(result, Ok):
                symbols = summarize_symbols(result)
                _pretty_print({"count": len(symbols), "symbols": symbols})
                return 0
            return _render(result)

        if args.command == "ticker":
            return _render(public.ticker(args.symbol))

        if args.command == "book":
            return _render(public.current_order_book(args.symbol, args.limit_bids, args.limit_asks))

        if args.command == "trades":
            return _render(public.trade_history(args.symbol, limit_trades=args.limit))

        try:
            if args.command == "balances":
                return _render(private.available_balances(args.account))
            if args.command == "orders":
                return _render(private.active_orders(args.account))
            if args.command == "heartbeat":
                return _render(private.heartbeat())
        except ConfigurationError as exc:
            parser.error(str(exc))

    return 2


if __name__ == "__main__":
    sys.exit(main())
