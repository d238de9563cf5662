from __future__ import annotations

from enum import Enum
from typing import Union

from .errors import ConfigurationError

PLAID_HOSTS = {
    "sandbox": "https://sandbox.plaid.com",
    "development": "https://development.plaid.com",
    "production": "https://production.plaid.com",
}


class Environment(str, Enum):
    """Plaid deployment target, each bound to one fixed host."""

    SANDBOX = "sandbox"
    DEVELOPMENT = "development"
    PRODUCTION = "production"

    @property
    def host(self) -> str:
        return PLAID_HOSTS[self.value]

    @classmethod
    def parse(cls, value: Union[str, "Environment"]) -> "Environment":
        """Resolve a case-insensitive environment name."""
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            raise ConfigurationError(
                f"Plaid environment must be one of SANDBOX, DEVELOPMENT or PRODUCTION, got {value!r}"
            ) from None
