from __future__ import annotations

from typing import Optional

from ..core.data_models import Item, ItemStatus, PlaidRequest, PlaidResponse


class AccessTokenRequest(PlaidRequest):
    """Body shared by every endpoint that only needs an access token."""

    access_token: str


class UpdateItemWebhookRequest(AccessTokenRequest):
    webhook: str


class ExchangePublicTokenRequest(PlaidRequest):
    public_token: str


class GetItemResponse(PlaidResponse):
    item: Item
    status: Optional[ItemStatus] = None
    access_token: Optional[str] = None


class RemoveItemResponse(PlaidResponse):
    pass


class UpdateItemWebhookResponse(PlaidResponse):
    item: Item


class InvalidateAccessTokenResponse(PlaidResponse):
    new_access_token: str


class CreatePublicTokenResponse(PlaidResponse):
    public_token: str


class ExchangePublicTokenResponse(PlaidResponse):
    access_token: str
    item_id: str
