"""Exception hierarchy raised by the Plaid client.

Callers can tell a business error reported by Plaid (``PlaidError``) apart
from a call that never completed (``PlaidRequestError`` and its
``PlaidDecodeError`` subclass).
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body returned by Plaid on any non-200 response."""

    request_id: str
    error_type: str
    error_code: str
    error_message: str
    display_message: Optional[str] = None


class PlaidClientError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(PlaidClientError):
    """Credentials or environment selection are missing or invalid."""


class PlaidRequestError(PlaidClientError):
    """The HTTP call could not be completed."""


class PlaidDecodeError(PlaidRequestError):
    """A response body did not match the schema expected for its status."""

    def __init__(self, message: str, status_code: int, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __reduce__(self):
        return self.__class__, (self.args[0], self.status_code, self.body)


class WebhookVerificationError(PlaidClientError):
    """A webhook delivery failed signature or freshness checks."""


class PlaidError(PlaidClientError):
    """Error reported by the Plaid API, augmented with the HTTP status."""

    def __init__(
        self,
        request_id: str,
        error_type: str,
        error_code: str,
        error_message: str,
        display_message: Optional[str],
        status_code: int,
    ):
        self.request_id = request_id
        self.error_type = error_type
        self.error_code = error_code
        self.error_message = error_message
        self.display_message = display_message
        self.status_code = status_code
        super().__init__(str(self))

    def __reduce__(self):
        return self.__class__, (
            self.request_id,
            self.error_type,
            self.error_code,
            self.error_message,
            self.display_message,
            self.status_code,
        )

    @classmethod
    def from_response(cls, payload: ErrorResponse, status_code: int) -> "PlaidError":
        return cls(
            request_id=payload.request_id,
            error_type=payload.error_type,
            error_code=payload.error_code,
            error_message=payload.error_message,
            display_message=payload.display_message,
            status_code=status_code,
        )

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            request_id=self.request_id,
            error_type=self.error_type,
            error_code=self.error_code,
            error_message=self.error_message,
            display_message=self.display_message,
        )

    def __str__(self) -> str:
        return (
            f"Plaid error - request ID: {self.request_id}, http status: {self.status_code}, "
            f"type: {self.error_type}, code: {self.error_code}, message: {self.error_message}, "
            f"display_message: {self.display_message or ''}"
        )
