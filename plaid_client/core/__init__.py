"""Core package exposing the Plaid request dispatcher and its error model."""

from .errors import (
    ConfigurationError,
    ErrorResponse,
    PlaidClientError,
    PlaidDecodeError,
    PlaidError,
    PlaidRequestError,
    WebhookVerificationError,
)
from .environment import Environment
from .data_models import Account, AccountBalances, Item, PlaidRequest, PlaidResponse, Security
from .client import PlaidClient
from .webhook_verification import verify_webhook

__all__ = [
    "Account",
    "AccountBalances",
    "ConfigurationError",
    "Environment",
    "ErrorResponse",
    "Item",
    "PlaidClient",
    "PlaidClientError",
    "PlaidDecodeError",
    "PlaidError",
    "PlaidRequest",
    "PlaidRequestError",
    "PlaidResponse",
    "Security",
    "WebhookVerificationError",
    "verify_webhook",
]
