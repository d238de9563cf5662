from __future__ import annotations

from ..core.data_models import PlaidRequest, PlaidResponse


class CreateProcessorTokenRequest(PlaidRequest):
    access_token: str
    account_id: str
    # e.g. "dwolla", "stripe", "galileo"
    processor: str


class CreateProcessorTokenResponse(PlaidResponse):
    processor_token: str
