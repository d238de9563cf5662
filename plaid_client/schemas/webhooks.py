from __future__ import annotations

from typing import Optional

from ..core.data_models import PlaidModel, PlaidRequest, PlaidResponse


class WebhookVerificationKey(PlaidModel):
    """JWK used to check the ``Plaid-Verification`` header of a webhook."""

    alg: str
    crv: str
    kid: str
    kty: str
    use: str
    x: str
    y: str
    created_at: int
    expired_at: Optional[int] = None


class GetWebhookVerificationKeyRequest(PlaidRequest):
    key_id: str


class GetWebhookVerificationKeyResponse(PlaidResponse):
    key: WebhookVerificationKey
