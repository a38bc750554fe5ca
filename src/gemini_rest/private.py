"""Gemini private (authenticated) REST endpoints.

Every method only picks a path and an options map; signing, dispatch and
classification happen in :class:`~gemini_rest.client.GeminiClient`. Optional
arguments left as ``None`` are omitted from the signed payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from .client import GeminiClient
from .payload import compact, expand_path
from .results import Result

# Order placement
NEW_ORDER = "/v1/order/new"
CANCEL_ORDER = "/v1/order/cancel"
WRAP_ORDER = "/v1/wrap/:symbol"
CANCEL_SESSION_ORDERS = "/v1/order/cancel/session"
CANCEL_ALL_ORDERS = "/v1/order/cancel/all"

# Order status
ORDER_STATUS = "/v1/order/status"
ACTIVE_ORDERS = "/v1/orders"
PAST_TRADES = "/v1/mytrades"
ORDERS_HISTORY = "/v1/orders/history"

# Fees and volume
NOTIONAL_VOLUME = "/v1/notionalvolume"
TRADE_VOLUME = "/v1/tradevolume"

FX_RATE = "/v2/fxrate/:symbol/:timestamp"

# Derivatives
OPEN_POSITIONS = "/v1/positions"
ACCOUNT_MARGIN = "/v1/margin"
RISK_STATS = "/v1/riskstats/:symbol"
FUNDING_PAYMENT = "/v1/perpetuals/fundingPayment"
FUNDING_REPORT_FILE = "/v1/perpetuals/fundingpaymentreport/records.xlsx"
FUNDING_REPORT_JSON = "/v1/perpetuals/fundingpaymentreport/records.json"

# Clearing
NEW_CLEARING_ORDER = "/v1/clearing/new"
NEW_BROKER_ORDER = "/v1/clearing/broker/new"
CLEARING_ORDER_STATUS = "/v1/clearing/status"
CANCEL_CLEARING_ORDER = "/v1/clearing/cancel"
CONFIRM_CLEARING_ORDER = "/v1/clearing/confirm"
CLEARING_ORDER_LIST = "/v1/clearing/list"
CLEARING_BROKER_LIST = "/v1/clearing/broker/list"
CLEARING_TRADES = "/v1/clearing/trades"

# Fund management
BALANCES = "/v1/balances"
NOTIONAL_BALANCES = "/v1/notionalbalances/:currency"
TRANSFERS = "/v1/transfers"
TRANSACTIONS = "/v1/transactions"
CUSTODY_ACCOUNT_FEES = "/v1/custodyaccountfees"
DEPOSIT_ADDRESSES = "/v1/addresses/:network"
NEW_DEPOSIT_ADDRESS = "/v1/deposit/:network/newAddress"
WITHDRAW = "/v1/withdraw/:currency"
GAS_FEE_ESTIMATE = "/v1/withdraw/:currency/feeEstimate"
INTERNAL_TRANSFER = "/v1/account/transfer/:currency"
ADD_BANK = "/v1/payments/addbank"
ADD_BANK_CAD = "/v1/payments/addbank/cad"
PAYMENT_METHODS = "/v1/payments/methods"

# Staking
STAKING_BALANCES = "/v1/balances/staking"
STAKING_RATES = "/v1/staking/rates"
STAKING_REWARDS = "/v1/staking/rewards"
STAKING_HISTORY = "/v1/staking/history"
STAKE = "/v1/staking/stake"
UNSTAKE = "/v1/staking/unstake"

# Approved addresses
APPROVED_ADDRESS_REQUEST = "/v1/approvedAddresses/:network/request"
APPROVED_ADDRESSES = "/v1/approvedAddresses/account/:network"
APPROVED_ADDRESS_REMOVE = "/v1/approvedAddresses/:network/remove"

# Account administration
ACCOUNT_DETAIL = "/v1/account"
CREATE_ACCOUNT = "/v1/account/create"
RENAME_ACCOUNT = "/v1/account/rename"
LIST_ACCOUNTS = "/v1/account/list"

HEARTBEAT = "/v1/heartbeat"


@dataclass(frozen=True)
class PrivateApi:
    """Authenticated endpoints. ``account`` selects a sub-account for master keys."""

    client: GeminiClient

    def _post(self, path: str, body: Mapping[str, Any], query: Optional[Mapping[str, Any]] = None) -> Result:
        return self.client.private_post(path, compact(body), query)

    # Order placement

    def new_order(
        self,
        symbol: str,
        amount: str,
        price: str,
        side: str,
        order_type: str,
        client_order_id: Optional[str] = None,
        stop_price: Optional[str] = None,
        options: Optional[List[str]] = None,
        account: Optional[str] = None,
    ) -> Result:
        """Place an order, e.g. ``order_type="exchange limit"``.

        ``options`` takes execution flags such as ``["maker-or-cancel"]``.
        """
        return self._post(
            NEW_ORDER,
            {
                "symbol": symbol,
                "amount": amount,
                "price": price,
                "side": side,
                "type": order_type,
                "client_order_id": client_order_id,
                "stop_price": stop_price,
                "options": options,
                "account": account,
            },
        )

    def cancel_order(self, order_id: int, account: Optional[str] = None) -> Result:
        """Cancel one order; cancelling an already cancelled order still succeeds."""
        return self._post(CANCEL_ORDER, {"order_id": order_id, "account": account})

    def wrap_order(
        self,
        symbol: str,
        amount: str,
        side: str,
        account: Optional[str] = None,
        client_order_id: Optional[str] = None,
    ) -> Result:
        """Wrap (``side="buy"``) or unwrap (``side="sell"``) a Gemini-issued asset."""
        return self._post(
            expand_path(WRAP_ORDER, symbol=symbol),
            {"amount": amount, "side": side, "account": account, "client_order_id": client_order_id},
        )

    def cancel_all_session_orders(self, account: Optional[str] = None) -> Result:
        return self._post(CANCEL_SESSION_ORDERS, {"account": account})

    def cancel_all_active_orders(self, account: Optional[str] = None) -> Result:
        """Cancel every live order of the account, including ones placed in the UI."""
        return self._post(CANCEL_ALL_ORDERS, {"account": account})

    # Order status

    def order_status(
        self,
        order_id: Optional[int] = None,
        client_order_id: Optional[str] = None,
        include_trades: Optional[bool] = None,
        account: Optional[str] = None,
    ) -> Result:
        if order_id is not None and client_order_id is not None:
            raise ValueError("Pass either order_id or client_order_id, not both")
        return self._post(
            ORDER_STATUS,
            {
                "order_id": order_id,
                "client_order_id": client_order_id,
                "include_trades": include_trades,
                "account": account,
            },
        )

    def active_orders(self, account: Optional[str] = None) -> Result:
        return self._post(ACTIVE_ORDERS, {"account": account})

    def past_trades(
        self,
        symbol: Optional[str] = None,
        limit_trades: Optional[int] = None,
        timestamp: Optional[int] = None,
        account: Optional[str] = None,
    ) -> Result:
        return self._post(
            PAST_TRADES,
            {"symbol": symbol, "limit_trades": limit_trades, "timestamp": timestamp, "account": account},
        )

    def orders_history(
        self,
        symbol: Optional[str] = None,
        limit_orders: Optional[int] = None,
        timestamp: Optional[int] = None,
        account: Optional[str] = None,
    ) -> Result:
        return self._post(
            ORDERS_HISTORY,
            {"symbol": symbol, "limit_orders": limit_orders, "timestamp": timestamp, "account": account},
        )

    # Fees and volume

    def notional_volume(self, symbol: Optional[str] = None, account: Optional[str] = None) -> Result:
        return self._post(NOTIONAL_VOLUME, {"symbol": symbol, "account": account})

    def trade_volume(self, account: Optional[str] = None) -> Result:
        return self._post(TRADE_VOLUME, {"account": account})

    def fx_rate(self, symbol: str, timestamp: int) -> Result:
        """Historical USD FX rate for ``symbol`` (e.g. ``gbpusd``) at ``timestamp``."""
        return self.client.private_get(expand_path(FX_RATE, symbol=symbol, timestamp=timestamp))

    # Derivatives

    def open_positions(self, account: Optional[str] = None) -> Result:
        return self._post(OPEN_POSITIONS, {"account": account})

    def account_margin(self, symbol: str, account: Optional[str] = None) -> Result:
        return self._post(ACCOUNT_MARGIN, {"symbol": symbol, "account": account})

    def risk_stats(self, symbol: str) -> Result:
        return self.client.private_get(expand_path(RISK_STATS, symbol=symbol))

    def funding_payment(
        self,
        since: Optional[int] = None,
        to: Optional[int] = None,
        account: Optional[str] = None,
    ) -> Result:
        """Funding payments between ``since`` and ``to``; the range travels in the query string."""
        return self._post(FUNDING_PAYMENT, {"account": account}, {"since": since, "to": to})

    def funding_payment_report_file(
        self,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        num_rows: Optional[int] = 8760,
    ) -> Result:
        """Funding payment report as raw ``.xlsx`` bytes."""
        return self.client.private_get(
            FUNDING_REPORT_FILE,
            {"fromDate": from_date, "toDate": to_date, "numRows": num_rows},
            binary=True,
        )

    def funding_payment_report_json(
        self,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        num_rows: Optional[int] = 8760,
    ) -> Result:
        return self.client.private_get(
            FUNDING_REPORT_JSON,
            {"fromDate": from_date, "toDate": to_date, "numRows": num_rows},
        )

    # Clearing

    def new_clearing_order(
        self,
        symbol: str,
        amount: str,
        price: str,
        side: str,
        counterparty_id: Optional[str] = None,
        expires_in_hrs: Optional[int] = None,
        account: Optional[str] = None,
    ) -> Result:
        return self._post(
            NEW_CLEARING_ORDER,
            {
                "symbol": symbol,
                "amount": amount,
                "price": price,
                "side": side,
                "counterparty_id": counterparty_id,
                "expires_in_hrs": expires_in_hrs,
                "account": account,
            },
        )

    def new_broker_order(
        self,
        symbol: str,
        amount: str,
        price: str,
        side: str,
        source_counterparty_id: str,
        target_counterparty_id: str,
        expires_in_hrs: Optional[int] = None,
        account: Optional[str] = None,
    ) -> Result:
        """Broker a clearing order between two counterparties."""
        return self._post(
            NEW_BROKER_ORDER,
            {
                "symbol": symbol,
                "amount": amount,
                "price": price,
                "side": side,
                "source_counterparty_id": source_counterparty_id,
                "target_counterparty_id": target_counterparty_id,
                "expires_in_hrs": expires_in_hrs,
                "account": account,
            },
        )

    def clearing_order_status(self, clearing_id: str, account: Optional[str] = None) -> Result:
        return self._post(CLEARING_ORDER_STATUS, {"clearing_id": clearing_id, "account": account})

    def cancel_clearing_order(self, clearing_id: str, account: Optional[str] = None) -> Result:
        return self._post(CANCEL_CLEARING_ORDER, {"clearing_id": clearing_id, "account": account})

    def confirm_clearing_order(
        self,
        clearing_id: str,
        symbol: str,
        amount: str,
        price: str,
        side: str,
        account: Optional[str] = None,
    ) -> Result:
        return self._post(
            CONFIRM_CLEARING_ORDER,
            {
                "clearing_id": clearing_id,
                "symbol": symbol,
                "amount": amount,
                "price": price,
                "side": side,
                "account": account,
            },
        )

    def clearing_order_list(
        self,
        side: str,
        symbol: Optional[str] = None,
        counterparty: Optional[str] = None,
        expiration_start: Optional[int] = None,
        expiration_end: Optional[int] = None,
        submission_start: Optional[int] = None,
        submission_end: Optional[int] = None,
        funded: Optional[bool] = None,
        account: Optional[str] = None,
    ) -> Result:
        return self._post(
            CLEARING_ORDER_LIST,
            {
                "side": side,
                "symbol": symbol,
                "counterparty": counterparty,
                "expiration_start": expiration_start,
                "expiration_end": expiration_end,
                "submission_start": submission_start,
                "submission_end": submission_end,
                "funded": funded,
                "account": account,
            },
        )

    def clearing_broker_list(
        self,
        symbol: Optional[str] = None,
        expiration_start: Optional[int] = None,
        expiration_end: Optional[int] = None,
        submission_start: Optional[int] = None,
        submission_end: Optional[int] = None,
        funded: Optional[bool] = None,
        account: Optional[str] = None,
    ) -> Result:
        return self._post(
            CLEARING_BROKER_LIST,
            {
                "symbol": symbol,
                "expiration_start": expiration_start,
                "expiration_end": expiration_end,
                "submission_start": submission_start,
                "submission_end": submission_end,
                "funded": funded,
                "account": account,
            },
        )

    def clearing_trades(
        self,
        timestamp_nanos: Optional[int] = None,
        limit: Optional[int] = None,
        account: Optional[str] = None,
    ) -> Result:
        return self._post(
            CLEARING_TRADES,
            {"timestamp_nanos": timestamp_nanos, "limit": limit, "account": account},
        )

    # Fund management

    def available_balances(self, account: Optional[str] = None) -> Result:
        return self._post(BALANCES, {"account": account})

    def notional_balances(self, currency: str, account: Optional[str] = None) -> Result:
        return self._post(expand_path(NOTIONAL_BALANCES, currency=currency), {"account": account})

    def transfers(
        self,
        currency: Optional[str] = None,
        timestamp: Optional[int] = None,
        limit_transfers: Optional[int] = None,
        show_completed_deposit_advances: Optional[bool] = None,
        account: Optional[str] = None,
    ) -> Result:
        return self._post(
            TRANSFERS,
            {
                "currency": currency,
                "timestamp": timestamp,
                "limit_transfers": limit_transfers,
                "show_completed_deposit_advances": show_completed_deposit_advances,
                "account": account,
            },
        )

    def transactions(
        self,
        timestamp_nanos: Optional[int] = None,
        limit: Optional[int] = None,
        continuation_token: Optional[str] = None,
        account: Optional[str] = None,
    ) -> Result:
        return self._post(
            TRANSACTIONS,
            {
                "timestamp_nanos": timestamp_nanos,
                "limit": limit,
                "continuation_token": continuation_token,
                "account": account,
            },
        )

    def estimate_gas_fee(
        self, currency: str, address: str, amount: str, account: Optional[str] = None
    ) -> Result:
        return self._post(
            expand_path(GAS_FEE_ESTIMATE, currency=currency),
            {"address": address, "amount": amount, "account": account},
        )

    def withdraw_crypto_funds(
        self,
        currency: str,
        address: str,
        amount: str,
        client_transfer_id: Optional[str] = None,
        memo: Optional[str] = None,
        account: Optional[str] = None,
    ) -> Result:
        """Withdraw to an approved address."""
        return self._post(
            expand_path(WITHDRAW, currency=currency),
            {
                "address": address,
                "amount": amount,
                "clientTransferId": client_transfer_id,
                "memo": memo,
                "account": account,
            },
        )

    def execute_internal_transfer(
        self,
        currency: str,
        source_account: str,
        target_account: str,
        amount: str,
        client_transfer_id: Optional[str] = None,
    ) -> Result:
        return self._post(
            expand_path(INTERNAL_TRANSFER, currency=currency),
            {
                "sourceAccount": source_account,
                "targetAccount": target_account,
                "amount": amount,
                "clientTransferId": client_transfer_id,
            },
        )

    def custody_account_fees(
        self,
        timestamp: Optional[int] = None,
        limit_transfers: Optional[int] = None,
        account: Optional[str] = None,
    ) -> Result:
        return self._post(
            CUSTODY_ACCOUNT_FEES,
            {"timestamp": timestamp, "limit_transfers": limit_transfers, "account": account},
        )

    def deposit_addresses(
        self, network: str, timestamp: Optional[int] = None, account: Optional[str] = None
    ) -> Result:
        return self._post(
            expand_path(DEPOSIT_ADDRESSES, network=network),
            {"timestamp": timestamp, "account": account},
        )

    def new_deposit_address(
        self,
        network: str,
        label: Optional[str] = None,
        legacy: Optional[bool] = None,
        account: Optional[str] = None,
    ) -> Result:
        return self._post(
            expand_path(NEW_DEPOSIT_ADDRESS, network=network),
            {"label": label, "legacy": legacy, "account": account},
        )

    def add_bank(
        self,
        account_number: str,
        routing: str,
        bank_type: str,
        name: str,
        account: Optional[str] = None,
    ) -> Result:
        """Add a bank account; ``bank_type`` is ``"checking"`` or ``"savings"``."""
        return self._post(
            ADD_BANK,
            {
                "accountnumber": account_number,
                "routing": routing,
                "type": bank_type,
                "name": name,
                "account": account,
            },
        )

    def add_bank_cad(
        self,
        swift_code: str,
        account_number: str,
        bank_type: str,
        name: str,
        account: Optional[str] = None,
        institution_number: Optional[str] = None,
        branch_number: Optional[str] = None,
    ) -> Result:
        return self._post(
            ADD_BANK_CAD,
            {
                "swiftcode": swift_code,
                "accountnumber": account_number,
                "type": bank_type,
                "name": name,
                "account": account,
                "institution_number": institution_number,
                "branch_number": branch_number,
            },
        )

    def payment_methods(self, account: Optional[str] = None) -> Result:
        return self._post(PAYMENT_METHODS, {"account": account})

    # Staking

    def staking_balances(self, account: Optional[str] = None) -> Result:
        return self._post(STAKING_BALANCES, {"account": account})

    def staking_rates(self) -> Result:
        return self.client.private_get(STAKING_RATES)

    def staking_rewards(
        self,
        since: str,
        until: Optional[str] = None,
        provider_id: Optional[str] = None,
        currency: Optional[str] = None,
        account: Optional[str] = None,
    ) -> Result:
        return self._post(
            STAKING_REWARDS,
            {
                "since": since,
                "until": until,
                "providerId": provider_id,
                "currency": currency,
                "account": account,
            },
        )

    def staking_history(
        self,
        since: Optional[str] = None,
        until: Optional[str] = None,
        limit: Optional[int] = None,
        provider_id: Optional[str] = None,
        currency: Optional[str] = None,
        interest_only: Optional[bool] = None,
        sort_asc: Optional[bool] = None,
        account: Optional[str] = None,
    ) -> Result:
        return self._post(
            STAKING_HISTORY,
            {
                "since": since,
                "until": until,
                "limit": limit,
                "providerId": provider_id,
                "currency": currency,
                "interestOnly": interest_only,
                "sortAsc": sort_asc,
                "account": account,
            },
        )

    def stake(self, provider_id: str, currency: str, amount: str, account: Optional[str] = None) -> Result:
        return self._post(
            STAKE,
            {"providerId": provider_id, "currency": currency, "amount": amount, "account": account},
        )

    def unstake(self, provider_id: str, currency: str, amount: str, account: Optional[str] = None) -> Result:
        return self._post(
            UNSTAKE,
            {"providerId": provider_id, "currency": currency, "amount": amount, "account": account},
        )

    # Approved addresses

    def create_address_request(
        self,
        network: str,
        address: str,
        label: str,
        account: Optional[str] = None,
        memo: Optional[str] = None,
    ) -> Result:
        return self._post(
            expand_path(APPROVED_ADDRESS_REQUEST, network=network),
            {"address": address, "label": label, "account": account, "memo": memo},
        )

    def view_approved_addresses(self, network: str, account: Optional[str] = None) -> Result:
        return self._post(expand_path(APPROVED_ADDRESSES, network=network), {"account": account})

    def remove_address(self, network: str, address: str, account: Optional[str] = None) -> Result:
        return self._post(
            expand_path(APPROVED_ADDRESS_REMOVE, network=network),
            {"address": address, "account": account},
        )

    # Account administration

    def account_detail(self, account: Optional[str] = None) -> Result:
        return self._post(ACCOUNT_DETAIL, {"account": account})

    def create_account(self, name: str, account_type: Optional[str] = "exchange") -> Result:
        return self._post(CREATE_ACCOUNT, {"name": name, "type": account_type})

    def rename_account(
        self, account: str, new_name: Optional[str] = None, new_account: Optional[str] = None
    ) -> Result:
        return self._post(
            RENAME_ACCOUNT,
            {"account": account, "newName": new_name, "newAccount": new_account},
        )

    def list_accounts(self, limit_accounts: Optional[int] = 500, timestamp: Optional[int] = None) -> Result:
        return self._post(LIST_ACCOUNTS, {"limit_accounts": limit_accounts, "timestamp": timestamp})

    def heartbeat(self) -> Result:
        """Keep a session with "Require Heartbeat" enabled from timing out."""
        return self._post(HEARTBEAT, {})


__all__ = ["PrivateApi"]
