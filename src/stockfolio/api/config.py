"""
Configuration for the quote provider client (Alpha Vantage).
"""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, Field

from stockfolio.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS

API_KEY_ENV_VAR = "ALPHAVANTAGE_API_KEY"


def _api_key_from_env() -> str:
    # "demo" is Alpha Vantage's public key; it only serves a handful of symbols.
    return os.getenv(API_KEY_ENV_VAR) or "demo"


class APIConfig(BaseModel):
    """Configuration for the quote provider client."""

    base_url: str = "https://www.alphavantage.co"
    query_path: str = "/query"
    api_key: str = Field(default_factory=_api_key_from_env)
    timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    outputsize: Literal["compact", "full"] = "compact"

    @property
    def query_url(self) -> str:
        """Full URL of the provider's query endpoint."""
        return f"{self.base_url.rstrip('/')}{self.query_path}"


# Singleton for global access
_config: APIConfig | None = None


def get_config() -> APIConfig:
    """Get the current global configuration (built from the environment on first use)."""
    global _config  # noqa: PLW0603 - intentional singleton for CLI state
    if _config is None:
        _config = APIConfig()
    return _config


def set_config(config: APIConfig | None) -> None:
    """Replace the global configuration. Passing `None` rebuilds it from the environment."""
    global _config  # noqa: PLW0603 - intentional singleton for CLI state
    _config = config
