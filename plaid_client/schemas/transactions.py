from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field

from ..core.data_models import Account, Item, PlaidModel, PlaidRequest, PlaidResponse


class PaymentMeta(PlaidModel):
    reference_number: Optional[str] = None
    ppd_id: Optional[str] = None
    payee: Optional[str] = None
    by_order_of: Optional[str] = None
    payer: Optional[str] = None
    payment_method: Optional[str] = None
    payment_processor: Optional[str] = None
    reason: Optional[str] = None


class Location(PlaidModel):
    address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    store_number: Optional[str] = None


class Transaction(PlaidModel):
    """A settled or pending transaction. Positive amounts are money leaving the account."""

    transaction_id: str
    account_id: str
    account_owner: Optional[str] = None
    pending_transaction_id: Optional[str] = None
    pending: bool
    # online, in store, other
    payment_channel: str
    payment_meta: Optional[PaymentMeta] = None
    name: str
    merchant_name: Optional[str] = None
    location: Optional[Location] = None
    authorized_date: Optional[dt.date] = None
    authorized_datetime: Optional[dt.datetime] = None
    date: dt.date
    datetime: Optional[dt.datetime] = None
    category_id: Optional[str] = None
    category: Optional[List[str]] = None
    unofficial_currency_code: Optional[str] = None
    iso_currency_code: Optional[str] = None
    amount: float
    transaction_code: Optional[str] = None


class RemovedTransaction(PlaidModel):
    transaction_id: str


class GetTransactionsOptions(BaseModel):
    account_ids: Optional[List[str]] = None
    count: int = 100
    offset: int = 0


class GetTransactionsRequest(PlaidRequest):
    access_token: str
    start_date: dt.date
    end_date: dt.date
    options: Optional[GetTransactionsOptions] = None


class SyncTransactionsRequest(PlaidRequest):
    access_token: str
    # omitted on the first call for an Item
    cursor: Optional[str] = None
    count: int = Field(default=100, ge=1, le=500)


class RefreshTransactionsRequest(PlaidRequest):
    access_token: str


class GetTransactionsResponse(PlaidResponse):
    accounts: List[Account]
    transactions: List[Transaction]
    total_transactions: int
    item: Item


class SyncTransactionsResponse(PlaidResponse):
    """One page of incremental updates; pass ``next_cursor`` back while ``has_more``."""

    added: List[Transaction] = Field(default_factory=list)
    modified: List[Transaction] = Field(default_factory=list)
    removed: List[RemovedTransaction] = Field(default_factory=list)
    next_cursor: str
    has_more: bool


class RefreshTransactionsResponse(PlaidResponse):
    pass
