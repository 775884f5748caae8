from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import ConfigurationError
from .models import ProviderCredentials

DEFAULT_ENDPOINT = "https://api.cognitive.microsofttranslator.com"

KEY_ENV = "AZURE_TRANSLATOR_KEY"
REGION_ENV = "AZURE_TRANSLATOR_REGION"
ENDPOINT_ENV = "AZURE_TRANSLATOR_ENDPOINT"
TIMEOUT_ENV = "TRANSPROXY_REQUEST_TIMEOUT"
LOG_LEVEL_ENV = "TRANSPROXY_LOG_LEVEL"

MISSING_CREDENTIALS_MESSAGE = (
    "Azure Translator credentials not configured on server. "
    f"Please add {KEY_ENV} and {REGION_ENV} environment variables."
)


class ProxyConfig(BaseModel):
    """Process-wide settings, built once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    region: Optional[str] = None
    endpoint: str = DEFAULT_ENDPOINT
    api_version: str = "3.0"
    request_timeout: Optional[float] = None  # None: rely on the platform limit
    log_level: str = "INFO"

    @field_validator("api_key", "region", mode="before")
    @classmethod
    def _blank_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("endpoint")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ProxyConfig":
        env = os.environ if environ is None else environ
        return cls(
            api_key=env.get(KEY_ENV),
            region=env.get(REGION_ENV),
            endpoint=env.get(ENDPOINT_ENV) or DEFAULT_ENDPOINT,
            request_timeout=env.get(TIMEOUT_ENV) or None,
            log_level=env.get(LOG_LEVEL_ENV) or "INFO",
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.region)

    def credentials(self) -> ProviderCredentials:
        """Return the provider credentials or raise ConfigurationError."""
        if not self.has_credentials:
            raise ConfigurationError(MISSING_CREDENTIALS_MESSAGE)
        return ProviderCredentials(api_key=self.api_key, region=self.region)
