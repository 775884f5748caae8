"""
Azure Translator (Cognitive Services, API v3) client.

Only the ``/translate`` operation is used. The caller supplies credentials;
this module never reads the environment.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from ..config import DEFAULT_ENDPOINT
from ..errors import ProviderError, ProviderResponseError
from ..models import ProviderCredentials

logger = structlog.get_logger(__name__)


class AzureTranslator:
    """Thin async wrapper around ``POST {endpoint}/translate``."""

    API_VERSION = "3.0"
    TRANSLATE_PATH = "/translate"

    KEY_HEADER = "Ocp-Apim-Subscription-Key"
    REGION_HEADER = "Ocp-Apim-Subscription-Region"

    def __init__(self, credentials: ProviderCredentials, endpoint: str = DEFAULT_ENDPOINT,
                 api_version: str = API_VERSION, timeout: float | None = None,
                 transport: httpx.AsyncBaseTransport | None = None):
        """
        Initialize the client.

        Args:
            credentials: subscription key and region sent with every request
            endpoint: provider base URL, without the ``/translate`` path
            api_version: value of the ``api-version`` query parameter
            timeout: upstream timeout in seconds; None waits indefinitely
            transport: optional httpx transport, used to stub the provider
        """
        self.credentials = credentials
        self.endpoint = endpoint.rstrip("/")
        self.api_version = api_version
        self.timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.endpoint}{self.TRANSLATE_PATH}"

    def build_params(self, target_lang: str, source_lang: str | None = None) -> dict[str, str]:
        """Query parameters; ``from`` is left out so the provider auto-detects."""
        params = {"api-version": self.api_version, "to": target_lang}
        if source_lang:
            params["from"] = source_lang
        return params

    def build_headers(self) -> dict[str, str]:
        return {
            self.KEY_HEADER: self.credentials.api_key,
            self.REGION_HEADER: self.credentials.region,
            "Content-Type": "application/json",
        }

    async def translate(self, texts: list[str], target_lang: str,
                        source_lang: str | None = None) -> list[str]:
        """
        Translate ``texts`` in one upstream call.

        Args:
            texts: strings to translate, in order
            target_lang: language code to translate into
            source_lang: language code of the input, or None to auto-detect

        Returns:
            Translated strings, ``result[i]`` being the translation of ``texts[i]``

        Raises:
            ProviderError: the provider answered with a non-2xx status
            ProviderResponseError: a 2xx payload that does not line up with ``texts``
            httpx.HTTPError: transport-level failure
        """
        payload = [{"text": text} for text in texts]
        params = self.build_params(target_lang, source_lang)

        logger.debug("azure_translate_request", count=len(texts), params=params)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.url, params=params, json=payload,
                                         headers=self.build_headers())

        if not response.is_success:
            raise ProviderError(self._error_message(response), status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            raise ProviderResponseError("Translation provider returned a non-JSON response") from None
        return self.extract_translations(data, expected=len(texts))

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            data = {}
        error = data.get("error") if isinstance(data, dict) else None
        message = error.get("message") if isinstance(error, dict) else None
        return message or f"provider API error: {response.status_code}"

    @staticmethod
    def extract_translations(data: Any, expected: int) -> list[str]:
        """Map ``[{"translations": [{"text": ...}]}, ...]`` to a list of strings."""
        if not isinstance(data, list):
            raise ProviderResponseError("Translation provider returned an unexpected payload")
        if len(data) != expected:
            raise ProviderResponseError(
                f"Translation provider returned {len(data)} results for {expected} texts"
            )

        texts = []
        for index, item in enumerate(data):
            try:
                text = item["translations"][0]["text"]
            except (KeyError, IndexError, TypeError):
                text = None
            if not isinstance(text, str):
                raise ProviderResponseError(
                    f"Translation provider result {index} has no translated text"
                )
            texts.append(text)
        return texts
