from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..core.data_models import PlaidModel, PlaidRequest, PlaidResponse

# {"depository": {"account_subtypes": ["checking", "savings"]}}
AccountFilters = Dict[str, Dict[str, List[str]]]


class LinkTokenUser(BaseModel):
    """End user the Link session is created for."""

    client_user_id: str
    legal_name: Optional[str] = None
    phone_number: Optional[str] = None
    phone_number_verified_time: Optional[dt.datetime] = None
    email_address: Optional[str] = None
    email_address_verified_time: Optional[dt.datetime] = None
    ssn: Optional[str] = Field(default=None, repr=False)
    date_of_birth: Optional[str] = None


class LinkTokenConfigs(BaseModel):
    """Caller-facing settings for ``link/token/create``."""

    user: LinkTokenUser
    client_name: str
    language: str = "en"
    country_codes: List[str] = Field(default_factory=lambda: ["US"])
    products: Optional[List[str]] = None
    webhook: Optional[str] = None
    link_customization_name: Optional[str] = None
    account_filters: Optional[AccountFilters] = None
    redirect_uri: Optional[str] = None
    android_package_name: Optional[str] = None
    access_token: Optional[str] = None


class CreateLinkTokenRequest(PlaidRequest, LinkTokenConfigs):
    pass


class GetLinkTokenRequest(PlaidRequest):
    link_token: str


class CreateLinkTokenResponse(PlaidResponse):
    link_token: str
    expiration: dt.datetime


class LinkTokenMetadata(PlaidModel):
    initial_products: List[str] = Field(default_factory=list)
    webhook: Optional[str] = None
    country_codes: List[str] = Field(default_factory=list)
    language: Optional[str] = None
    account_filters: Optional[AccountFilters] = None
    redirect_uri: Optional[str] = None
    client_name: Optional[str] = None


class GetLinkTokenResponse(PlaidResponse):
    link_token: str
    created_at: Optional[dt.datetime] = None
    expiration: Optional[dt.datetime] = None
    metadata: LinkTokenMetadata
