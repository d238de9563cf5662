from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from ..core.data_models import Account, AccountIdsOptions, Item, PlaidModel, PlaidRequest, PlaidResponse


class GetAuthOptions(AccountIdsOptions):
    pass


class GetAuthRequest(PlaidRequest):
    access_token: str
    options: Optional[GetAuthOptions] = None


class ACHNumber(PlaidModel):
    account_id: str
    account: str
    routing: str
    wire_routing: Optional[str] = None


class EFTNumber(PlaidModel):
    account_id: str
    account: str
    institution: str
    branch: str


class IBANNumber(PlaidModel):
    account_id: str
    iban: str
    bic: str


class BACSNumber(PlaidModel):
    account_id: str
    account: str
    sort_code: str


class AccountNumberCollection(PlaidModel):
    """Transfer identifiers, one list per payment network."""

    ach: List[ACHNumber] = Field(default_factory=list)
    eft: List[EFTNumber] = Field(default_factory=list)
    international: List[IBANNumber] = Field(default_factory=list)
    bacs: List[BACSNumber] = Field(default_factory=list)


class GetAuthResponse(PlaidResponse):
    accounts: List[Account]
    numbers: AccountNumberCollection
    item: Item
