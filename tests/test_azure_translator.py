"""Tests for the Azure Translator client."""
import httpx
import pytest

from transproxy.errors import ProviderError, ProviderResponseError
from transproxy.models import ProviderCredentials
from transproxy.mt.azure import AzureTranslator


MOCK_TRANSLATE_RESPONSE = [
    {"translations": [{"text": "hola", "to": "es"}]},
    {"translations": [{"text": "mundo", "to": "es"}]},
]

CREDENTIALS = ProviderCredentials(api_key="test-key", region="westeurope")


def make_translator(upstream, **kwargs) -> AzureTranslator:
    return AzureTranslator(CREDENTIALS, transport=upstream.transport, **kwargs)


class TestAzureTranslatorRequest:
    """Shape of the outbound request."""

    @pytest.mark.asyncio
    async def test_request_shape(self, stub_upstream):
        """Test URL, headers and payload sent upstream."""
        upstream = stub_upstream(json_body=MOCK_TRANSLATE_RESPONSE)

        await make_translator(upstream).translate(["hello", "world"], "es")

        request = upstream.last_request
        assert request.method == "POST"
        assert request.url.scheme == "https"
        assert request.url.host == "api.cognitive.microsofttranslator.com"
        assert request.url.path == "/translate"
        assert request.headers["Ocp-Apim-Subscription-Key"] == "test-key"
        assert request.headers["Ocp-Apim-Subscription-Region"] == "westeurope"
        assert request.headers["Content-Type"] == "application/json"
        assert upstream.last_payload == [{"text": "hello"}, {"text": "world"}]

    @pytest.mark.asyncio
    async def test_query_without_source_lang(self, stub_upstream):
        """Test ``from`` is omitted so the provider auto-detects."""
        upstream = stub_upstream(json_body=MOCK_TRANSLATE_RESPONSE[:1])

        await make_translator(upstream).translate(["hello"], "es")

        params = upstream.last_request.url.params
        assert params["api-version"] == "3.0"
        assert params["to"] == "es"
        assert "from" not in params

    @pytest.mark.asyncio
    async def test_query_with_source_lang(self, stub_upstream):
        """Test ``from`` is passed through verbatim."""
        upstream = stub_upstream(json_body=MOCK_TRANSLATE_RESPONSE[:1])

        await make_translator(upstream).translate(["hello"], "es", source_lang="en-GB")

        assert upstream.last_request.url.params["from"] == "en-GB"

    @pytest.mark.asyncio
    async def test_custom_endpoint(self, stub_upstream):
        """Test a configured endpoint replaces the public one."""
        upstream = stub_upstream(json_body=MOCK_TRANSLATE_RESPONSE[:1])
        translator = make_translator(upstream, endpoint="https://translator.example.test/")

        await translator.translate(["hello"], "es")

        assert str(upstream.last_request.url).startswith("https://translator.example.test/translate?")


class TestAzureTranslatorResponse:
    """Mapping of provider replies."""

    @pytest.mark.asyncio
    async def test_success_preserves_order(self, stub_upstream):
        """Test each result lines up with its input text."""
        upstream = stub_upstream(json_body=MOCK_TRANSLATE_RESPONSE)

        result = await make_translator(upstream).translate(["hello", "world"], "es")

        assert result == ["hola", "mundo"]
        assert len(upstream.requests) == 1

    @pytest.mark.asyncio
    async def test_error_message_passthrough(self, stub_upstream):
        """Test the provider status and message are kept."""
        upstream = stub_upstream(status_code=400, json_body={"error": {"code": 400036, "message": "bad language"}})

        with pytest.raises(ProviderError) as exc_info:
            await make_translator(upstream).translate(["hello"], "xx")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "bad language"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kwargs", [
        {"content": b"<html>Service Unavailable</html>"},
        {"json_body": {}},
        {"json_body": {"error": "quota"}},
        {"json_body": ["unexpected"]},
    ])
    async def test_error_message_fallback(self, stub_upstream, kwargs):
        """Test the generic message when no provider message is available."""
        upstream = stub_upstream(status_code=503, **kwargs)

        with pytest.raises(ProviderError) as exc_info:
            await make_translator(upstream).translate(["hello"], "es")

        assert exc_info.value.status_code == 503
        assert exc_info.value.message == "provider API error: 503"

    @pytest.mark.asyncio
    async def test_count_mismatch(self, stub_upstream):
        """Test fewer results than texts fails cleanly."""
        upstream = stub_upstream(json_body=MOCK_TRANSLATE_RESPONSE[:1])

        with pytest.raises(ProviderResponseError) as exc_info:
            await make_translator(upstream).translate(["hello", "world"], "es")

        assert exc_info.value.status_code == 502
        assert "1 results for 2 texts" in exc_info.value.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"translations": []},
        [{"translations": []}],
        [{}],
        [{"translations": [{"to": "es"}]}],
        [{"translations": [{"text": None}]}],
        ["hola"],
    ])
    async def test_unexpected_shape(self, stub_upstream, payload):
        """Test payloads without a translated text become 502 errors."""
        upstream = stub_upstream(json_body=payload)

        with pytest.raises(ProviderResponseError):
            await make_translator(upstream).translate(["hello"], "es")

    @pytest.mark.asyncio
    async def test_non_json_success(self, stub_upstream):
        """Test a 2xx reply that is not JSON."""
        upstream = stub_upstream(content=b"ok")

        with pytest.raises(ProviderResponseError):
            await make_translator(upstream).translate(["hello"], "es")

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, stub_upstream):
        """Test network failures are left for the handler to report."""
        upstream = stub_upstream(exc=httpx.ConnectError("connection refused"))

        with pytest.raises(httpx.ConnectError):
            await make_translator(upstream).translate(["hello"], "es")
