from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel

from ..core.data_models import Account, AccountIdsOptions, Item, PlaidModel, PlaidRequest, PlaidResponse, Security


class Holding(PlaidModel):
    account_id: str
    security_id: str
    institution_price: float
    institution_price_as_of: Optional[dt.date] = None
    institution_value: float
    cost_basis: Optional[float] = None
    quantity: float
    iso_currency_code: Optional[str] = None
    unofficial_currency_code: Optional[str] = None


class InvestmentTransaction(PlaidModel):
    investment_transaction_id: str
    cancel_transaction_id: Optional[str] = None
    account_id: str
    security_id: Optional[str] = None
    date: dt.date
    name: str
    quantity: float
    amount: float
    price: float
    fees: Optional[float] = None
    # buy, sell, cancel, cash, fee, transfer
    type: str
    subtype: str
    iso_currency_code: Optional[str] = None
    unofficial_currency_code: Optional[str] = None


class GetHoldingsOptions(AccountIdsOptions):
    pass


class GetInvestmentTransactionsOptions(BaseModel):
    account_ids: Optional[List[str]] = None
    count: Optional[int] = None
    offset: Optional[int] = None


class GetHoldingsRequest(PlaidRequest):
    access_token: str
    options: Optional[GetHoldingsOptions] = None


class GetInvestmentTransactionsRequest(PlaidRequest):
    access_token: str
    start_date: dt.date
    end_date: dt.date
    options: Optional[GetInvestmentTransactionsOptions] = None


class GetHoldingsResponse(PlaidResponse):
    accounts: List[Account]
    holdings: List[Holding]
    securities: List[Security]
    item: Item


class GetInvestmentTransactionsResponse(PlaidResponse):
    accounts: List[Account]
    securities: List[Security]
    investment_transactions: List[InvestmentTransaction]
    total_investment_transactions: int
    item: Item
