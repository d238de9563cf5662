from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv

from .core.environment import Environment
from .core.errors import ConfigurationError

logger = logging.getLogger(__name__)

CLIENT_ID_VAR = "PLAID_CLIENT_ID"
SECRET_VAR = "PLAID_SECRET"
ENVIRONMENT_VAR = "PLAID_ENVIRONMENT"


@dataclass(frozen=True)
class Settings:
    """Plaid credentials and environment selection."""

    client_id: str
    secret: str = field(repr=False)
    environment: Environment

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Read settings from the process environment, after loading a ``.env`` file.

        Raises ConfigurationError when a variable is missing or PLAID_ENVIRONMENT
        is not one of sandbox, development or production (any case).
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        missing = [name for name in (CLIENT_ID_VAR, SECRET_VAR, ENVIRONMENT_VAR) if not environ.get(name)]
        if missing:
            raise ConfigurationError(f"Missing environment variable(s): {', '.join(missing)}")

        environment = Environment.parse(environ[ENVIRONMENT_VAR])
        logger.debug("Loaded Plaid settings for environment %s", environment.value)
        return cls(
            client_id=environ[CLIENT_ID_VAR],
            secret=environ[SECRET_VAR],
            environment=environment,
        )
