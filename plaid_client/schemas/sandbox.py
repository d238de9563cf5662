"""Sandbox-only helpers for creating and manipulating test Items."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from ..core.data_models import PlaidRequest, PlaidResponse


class SandboxPublicTokenOptions(BaseModel):
    webhook: Optional[str] = None
    override_username: Optional[str] = None
    override_password: Optional[str] = None


class CreateSandboxPublicTokenRequest(PlaidRequest):
    institution_id: str
    initial_products: List[str]
    options: Optional[SandboxPublicTokenOptions] = None


class ResetSandboxItemRequest(PlaidRequest):
    access_token: str


class SetSandboxVerificationStatusRequest(PlaidRequest):
    access_token: str
    account_id: str
    # automatically_verified, verification_expired
    verification_status: str


class FireWebhookRequest(PlaidRequest):
    access_token: str
    webhook_code: str


class CreateSandboxPublicTokenResponse(PlaidResponse):
    public_token: str


class ResetSandboxItemResponse(PlaidResponse):
    reset_login: bool


class SetSandboxVerificationStatusResponse(PlaidResponse):
    pass


class FireWebhookResponse(PlaidResponse):
    webhook_fired: bool
