from __future__ import annotations

from typing import List, Optional

from ..core.data_models import Account, AccountIdsOptions, Item, PlaidRequest, PlaidResponse


class GetAccountsOptions(AccountIdsOptions):
    pass


class GetBalancesOptions(AccountIdsOptions):
    min_last_updated_datetime: Optional[str] = None


class GetAccountsRequest(PlaidRequest):
    access_token: str
    options: Optional[GetAccountsOptions] = None


class GetBalancesRequest(PlaidRequest):
    access_token: str
    options: Optional[GetBalancesOptions] = None


class GetAccountsResponse(PlaidResponse):
    accounts: List[Account]
    item: Item


class GetBalancesResponse(PlaidResponse):
    accounts: List[Account]
    item: Optional[Item] = None
