from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from ..core.data_models import Account, AccountIdsOptions, Item, PlaidModel, PlaidRequest, PlaidResponse


class AddressData(PlaidModel):
    city: Optional[str] = None
    region: Optional[str] = None
    street: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class Address(PlaidModel):
    data: AddressData
    primary: Optional[bool] = None


class Email(PlaidModel):
    data: str
    primary: Optional[bool] = None
    # primary, secondary, other
    type: Optional[str] = None


class PhoneNumber(PlaidModel):
    data: str
    primary: Optional[bool] = None
    # home, work, office, mobile, mobile1, other
    type: Optional[str] = None


class Owner(PlaidModel):
    """Account holder details as reported by the institution."""

    names: List[str] = Field(default_factory=list)
    phone_numbers: List[PhoneNumber] = Field(default_factory=list)
    emails: List[Email] = Field(default_factory=list)
    addresses: List[Address] = Field(default_factory=list)


class AccountWithOwners(Account):
    owners: List[Owner] = Field(default_factory=list)


class GetIdentityOptions(AccountIdsOptions):
    pass


class GetIdentityRequest(PlaidRequest):
    access_token: str
    options: Optional[GetIdentityOptions] = None


class GetIdentityResponse(PlaidResponse):
    accounts: List[AccountWithOwners]
    item: Item
