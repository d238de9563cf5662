"""Records shared by several Plaid product endpoints."""
from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import ErrorResponse


class PlaidModel(BaseModel):
    """Base for decoded Plaid objects; fields Plaid adds later are kept as extras."""

    model_config = ConfigDict(extra="allow")


class PlaidRequest(BaseModel):
    """Base for request bodies. Plaid authenticates via these two body fields."""

    client_id: str
    secret: str = Field(repr=False)


class PlaidResponse(PlaidModel):
    request_id: str


class AccountBalances(PlaidModel):
    available: Optional[float] = None
    current: Optional[float] = None
    limit: Optional[float] = None
    iso_currency_code: Optional[str] = None
    unofficial_currency_code: Optional[str] = None


class Account(PlaidModel):
    """A financial institution account attached to an Item."""

    account_id: str
    balances: AccountBalances
    mask: Optional[str] = None
    name: str
    official_name: Optional[str] = None
    # investment, credit, depository, loan, brokerage, other
    type: str
    subtype: Optional[str] = None
    verification_status: Optional[str] = None


class Item(PlaidModel):
    """A login at a financial institution."""

    item_id: str
    institution_id: Optional[str] = None
    webhook: Optional[str] = None
    error: Optional[ErrorResponse] = None
    available_products: List[str] = Field(default_factory=list)
    billed_products: List[str] = Field(default_factory=list)
    consent_expiration_time: Optional[dt.datetime] = None
    update_type: Optional[str] = None


class ProductStatus(PlaidModel):
    last_successful_update: Optional[dt.datetime] = None
    last_failed_update: Optional[dt.datetime] = None


class WebhookStatus(PlaidModel):
    sent_at: Optional[dt.datetime] = None
    code_sent: Optional[str] = None


class ItemStatus(PlaidModel):
    investments: Optional[ProductStatus] = None
    transactions: Optional[ProductStatus] = None
    last_webhook: Optional[WebhookStatus] = None


class Security(PlaidModel):
    """A security referenced by holdings and investment transactions."""

    security_id: str
    isin: Optional[str] = None
    cusip: Optional[str] = None
    sedol: Optional[str] = None
    institution_security_id: Optional[str] = None
    institution_id: Optional[str] = None
    proxy_security_id: Optional[str] = None
    name: Optional[str] = None
    ticker_symbol: Optional[str] = None
    is_cash_equivalent: Optional[bool] = None
    type: Optional[str] = None
    close_price: Optional[float] = None
    close_price_as_of: Optional[dt.date] = None
    iso_currency_code: Optional[str] = None
    unofficial_currency_code: Optional[str] = None


class AccountIdsOptions(BaseModel):
    """Filter shared by endpoints that can be narrowed to some accounts."""

    account_ids: Optional[List[str]] = None
