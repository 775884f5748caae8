"""
Serverless entry point for the translation proxy.

The platform calls ``handler(event, context)`` with a Netlify / API Gateway
style event (``httpMethod``, ``body``, ``isBase64Encoded``) and expects a
mapping with ``statusCode``, ``headers`` and a JSON string ``body``.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Mapping

import anyio
import httpx
import structlog

from .config import ProxyConfig
from .errors import ConfigurationError, ProviderError, RequestValidationError, TransProxyError
from .logging_setup import configure_logging
from .models import INVALID_JSON_MESSAGE, TranslatedText, TranslationRequest, TranslationResult
from .mt import AzureTranslator

logger = structlog.get_logger(__name__)

BASE_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}

CORS_HEADERS = {
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def json_response(status_code: int, body: Any, cors: bool = False) -> dict[str, Any]:
    headers = dict(BASE_HEADERS)
    if cors:
        headers.update(CORS_HEADERS)
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": json.dumps(body, ensure_ascii=False),
    }


def error_response(status_code: int, message: str) -> dict[str, Any]:
    return json_response(status_code, {"error": message})


def _event_body(event: Mapping[str, Any]) -> str | bytes | None:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError):
            raise RequestValidationError(INVALID_JSON_MESSAGE) from None
    return body


class TranslationProxy:
    """Validates one inbound event, forwards it to Azure and reshapes the reply."""

    def __init__(self, config: ProxyConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport

    def translator(self) -> AzureTranslator:
        return AzureTranslator(
            self.config.credentials(),
            endpoint=self.config.endpoint,
            api_version=self.config.api_version,
            timeout=self.config.request_timeout,
            transport=self._transport,
        )

    async def handle(self, event: Mapping[str, Any]) -> dict[str, Any]:
        """Answer one event. Never raises; every failure becomes a JSON error."""
        method = event.get("httpMethod")
        if not isinstance(method, str) or method.upper() != "POST":
            return error_response(405, "Method not allowed")

        try:
            return await self._translate(event)
        except RequestValidationError as e:
            logger.debug("request_rejected", error=e.message)
            return error_response(e.status_code, e.message)
        except ConfigurationError as e:
            logger.error("proxy_misconfigured", error=e.message)
            return error_response(e.status_code, e.message)
        except ProviderError as e:
            logger.warning("provider_error", status=e.status_code, error=e.message)
            return error_response(e.status_code, e.message)
        except TransProxyError as e:
            logger.error("provider_response_invalid", status=e.status_code, error=e.message)
            return error_response(e.status_code, e.message)
        except Exception as e:
            logger.exception("translation_failed")
            return error_response(500, str(e) or "Internal server error")

    async def _translate(self, event: Mapping[str, Any]) -> dict[str, Any]:
        # credentials before payload: a misconfigured deployment answers 500 for any body
        translator = self.translator()
        request = TranslationRequest.parse_body(_event_body(event))

        translated = await translator.translate(
            request.texts, request.target_lang, request.source_lang
        )
        result = TranslationResult(translations=[TranslatedText(text=t) for t in translated])
        return json_response(200, result.model_dump(), cors=True)


def make_handler(config: ProxyConfig, transport: httpx.AsyncBaseTransport | None = None):
    """Bind a synchronous platform handler to an explicit configuration."""
    proxy = TranslationProxy(config, transport=transport)

    def handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
        return anyio.run(proxy.handle, event)

    handler.proxy = proxy
    return handler


_startup_config = ProxyConfig.from_env()
configure_logging(_startup_config.log_level)
handler = make_handler(_startup_config)
