"""Async client for the Plaid API."""

from .core import (
    ConfigurationError,
    Environment,
    ErrorResponse,
    PlaidClient,
    PlaidClientError,
    PlaidDecodeError,
    PlaidError,
    PlaidRequestError,
    WebhookVerificationError,
    verify_webhook,
)
from .config import Settings

__version__ = "0.4.0"

__all__ = [
    "ConfigurationError",
    "Environment",
    "ErrorResponse",
    "PlaidClient",
    "PlaidClientError",
    "PlaidDecodeError",
    "PlaidError",
    "PlaidRequestError",
    "Settings",
    "WebhookVerificationError",
    "verify_webhook",
]
