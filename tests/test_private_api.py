from __future__ import annotations

import base64
import json
import sys
from pathlib import Path
from typing import Any, Iterator
from unittest.mock import MagicMock

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from gemini_rest.client import GeminiClient  # noqa: E402
from gemini_rest.config import Credentials  # noqa: E402
from gemini_rest.nonce import NonceGenerator  # noqa: E402
from gemini_rest.private import PrivateApi  # noqa: E402
from gemini_rest.results import Ok  # noqa: E402


class DummyResponse:
    def __init__(self, content: bytes = b"{}", status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code
        self.headers = {"Content-Type": "application/json"}
        self.raw = None

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        yield self.content

    def close(self) -> None:
        pass


def _api(content: bytes = b"{}") -> tuple[PrivateApi, MagicMock]:
    session = MagicMock()
    session.request.return_value = DummyResponse(content)
    client = GeminiClient(
        "sandbox",
        Credentials("account-key", b"secret"),
        session=session,
        nonces=NonceGenerator(clock=lambda: 1.0),
    )
    return PrivateApi(client), session


def _sent(session: MagicMock) -> tuple[str, str, dict[str, Any]]:
    args, kwargs = session.request.call_args
    payload = json.loads(base64.b64decode(kwargs["headers"]["X-GEMINI-PAYLOAD"]))
    return args[0], args[1], payload


def test_new_order_omits_unset_options() -> None:
    api, session = _api()

    api.new_order("btcusd", "1", "100", "buy", "exchange limit", options=["maker-or-cancel"])

    method, url, payload = _sent(session)
    assert (method, url) == ("POST", "https://api.sandbox.gemini.com/v1/order/new")
    assert payload == {
        "request": "/v1/order/new",
        "nonce": 1000,
        "symbol": "btcusd",
        "amount": "1",
        "price": "100",
        "side": "buy",
        "type": "exchange limit",
        "options": ["maker-or-cancel"],
    }


@pytest.mark.parametrize(
    "call, path, body",
    [
        (lambda api: api.cancel_order(12, account="primary"), "/v1/order/cancel", {"order_id": 12, "account": "primary"}),
        (lambda api: api.wrap_order("GUSDUSD", "10", "buy"), "/v1/wrap/GUSDUSD", {"amount": "10", "side": "buy"}),
        (lambda api: api.cancel_all_session_orders(), "/v1/order/cancel/session", {}),
        (lambda api: api.cancel_all_active_orders(), "/v1/order/cancel/all", {}),
        (lambda api: api.order_status(order_id=5, include_trades=False), "/v1/order/status", {"order_id": 5, "include_trades": False}),
        (lambda api: api.active_orders(), "/v1/orders", {}),
        (lambda api: api.past_trades("btcusd", 10), "/v1/mytrades", {"symbol": "btcusd", "limit_trades": 10}),
        (lambda api: api.orders_history(limit_orders=5), "/v1/orders/history", {"limit_orders": 5}),
        (lambda api: api.notional_volume(), "/v1/notionalvolume", {}),
        (lambda api: api.trade_volume(), "/v1/tradevolume", {}),
        (lambda api: api.open_positions(), "/v1/positions", {}),
        (lambda api: api.account_margin("BTC-GUSD-PERP"), "/v1/margin", {"symbol": "BTC-GUSD-PERP"}),
        (lambda api: api.clearing_order_status("abc"), "/v1/clearing/status", {"clearing_id": "abc"}),
        (lambda api: api.cancel_clearing_order("abc"), "/v1/clearing/cancel", {"clearing_id": "abc"}),
        (lambda api: api.clearing_order_list("buy", funded=False), "/v1/clearing/list", {"side": "buy", "funded": False}),
        (lambda api: api.clearing_broker_list(symbol="btcusd"), "/v1/clearing/broker/list", {"symbol": "btcusd"}),
        (lambda api: api.clearing_trades(limit=3), "/v1/clearing/trades", {"limit": 3}),
        (lambda api: api.available_balances(), "/v1/balances", {}),
        (lambda api: api.notional_balances("usd"), "/v1/notionalbalances/usd", {}),
        (lambda api: api.transfers(currency="btc"), "/v1/transfers", {"currency": "btc"}),
        (lambda api: api.transactions(limit=10), "/v1/transactions", {"limit": 10}),
        (lambda api: api.estimate_gas_fee("eth", "0xabc", "1"), "/v1/withdraw/eth/feeEstimate", {"address": "0xabc", "amount": "1"}),
        (
            lambda api: api.withdraw_crypto_funds("btc", "addr", "0.1", client_transfer_id="t-1"),
            "/v1/withdraw/btc",
            {"address": "addr", "amount": "0.1", "clientTransferId": "t-1"},
        ),
        (
            lambda api: api.execute_internal_transfer("btc", "primary", "vault", "1"),
            "/v1/account/transfer/btc",
            {"sourceAccount": "primary", "targetAccount": "vault", "amount": "1"},
        ),
        (lambda api: api.custody_account_fees(), "/v1/custodyaccountfees", {}),
        (lambda api: api.deposit_addresses("bitcoin"), "/v1/addresses/bitcoin", {}),
        (lambda api: api.new_deposit_address("ethereum", label="main"), "/v1/deposit/ethereum/newAddress", {"label": "main"}),
        (
            lambda api: api.add_bank("123", "456", "checking", "Main"),
            "/v1/payments/addbank",
            {"accountnumber": "123", "routing": "456", "type": "checking", "name": "Main"},
        ),
        (
            lambda api: api.add_bank_cad("SWIFT", "123", "checking", "Main"),
            "/v1/payments/addbank/cad",
            {"swiftcode": "SWIFT", "accountnumber": "123", "type": "checking", "name": "Main"},
        ),
        (lambda api: api.payment_methods(), "/v1/payments/methods", {}),
        (lambda api: api.staking_balances(), "/v1/balances/staking", {}),
        (lambda api: api.staking_rewards("2024-01-01"), "/v1/staking/rewards", {"since": "2024-01-01"}),
        (lambda api: api.staking_history(sort_asc=True), "/v1/staking/history", {"sortAsc": True}),
        (lambda api: api.stake("p1", "eth", "1"), "/v1/staking/stake", {"providerId": "p1", "currency": "eth", "amount": "1"}),
        (lambda api: api.unstake("p1", "eth", "1"), "/v1/staking/unstake", {"providerId": "p1", "currency": "eth", "amount": "1"}),
        (
            lambda api: api.create_address_request("ethereum", "0xabc", "cold"),
            "/v1/approvedAddresses/ethereum/request",
            {"address": "0xabc", "label": "cold"},
        ),
        (lambda api: api.view_approved_addresses("ethereum"), "/v1/approvedAddresses/account/ethereum", {}),
        (lambda api: api.remove_address("ethereum", "0xabc"), "/v1/approvedAddresses/ethereum/remove", {"address": "0xabc"}),
        (lambda api: api.account_detail(), "/v1/account", {}),
        (lambda api: api.create_account("desk"), "/v1/account/create", {"name": "desk", "type": "exchange"}),
        (lambda api: api.rename_account("desk", new_name="Desk"), "/v1/account/rename", {"account": "desk", "newName": "Desk"}),
        (lambda api: api.list_accounts(), "/v1/account/list", {"limit_accounts": 500}),
        (lambda api: api.heartbeat(), "/v1/heartbeat", {}),
    ],
)
def test_private_posts(call, path, body) -> None:
    api, session = _api()

    assert call(api) == Ok({})

    method, url, payload = _sent(session)
    assert method == "POST"
    assert url == "https://api.sandbox.gemini.com" + path
    assert payload == {"request": path, "nonce": 1000, **body}


def test_clearing_orders_carry_counterparties() -> None:
    api, session = _api()

    api.new_broker_order("btcusd", "1", "100", "buy", "SRC", "DST", expires_in_hrs=24)

    _, _, payload = _sent(session)
    assert payload["source_counterparty_id"] == "SRC"
    assert payload["target_counterparty_id"] == "DST"
    assert payload["expires_in_hrs"] == 24

    api.new_clearing_order("btcusd", "1", "100", "sell", counterparty_id="CP")
    _, url, payload = _sent(session)
    assert url.endswith("/v1/clearing/new")
    assert payload["counterparty_id"] == "CP"

    api.confirm_clearing_order("abc", "btcusd", "1", "100", "sell")
    _, url, payload = _sent(session)
    assert url.endswith("/v1/clearing/confirm")
    assert payload["clearing_id"] == "abc"


def test_order_status_rejects_both_identifiers() -> None:
    api, session = _api()

    with pytest.raises(ValueError):
        api.order_status(order_id=1, client_order_id="c-1")
    session.request.assert_not_called()


@pytest.mark.parametrize(
    "call, path",
    [
        (lambda api: api.fx_rate("gbpusd", 1594651859000), "/v2/fxrate/gbpusd/1594651859000"),
        (lambda api: api.risk_stats("BTCGUSDPERP"), "/v1/riskstats/BTCGUSDPERP"),
        (lambda api: api.staking_rates(), "/v1/staking/rates"),
    ],
)
def test_authenticated_gets(call, path) -> None:
    api, session = _api()

    call(api)

    method, url, payload = _sent(session)
    assert method == "GET"
    assert url == "https://api.sandbox.gemini.com" + path
    assert payload == {"request": path, "nonce": 1000}


def test_funding_payment_query_stays_out_of_signed_request() -> None:
    api, session = _api()

    api.funding_payment(since=1, to=2, account="primary")

    _, url, payload = _sent(session)
    assert url == "https://api.sandbox.gemini.com/v1/perpetuals/fundingPayment"
    assert payload == {"request": "/v1/perpetuals/fundingPayment", "nonce": 1000, "account": "primary"}
    assert session.request.call_args.kwargs["params"] == [("since", "1"), ("to", "2")]


def test_funding_report_file_returns_bytes() -> None:
    api, session = _api(b"PK\x03\x04")

    result = api.funding_payment_report_file(from_date="2024-01-01")

    assert result == Ok(b"PK\x03\x04")
    assert session.request.call_args.kwargs["params"] == [("fromDate", "2024-01-01"), ("numRows", "8760")]


def test_funding_report_json_is_decoded() -> None:
    api, _ = _api(b'[{"amount": "1"}]')

    assert api.funding_payment_report_json(num_rows=1) == Ok([{"amount": "1"}])
