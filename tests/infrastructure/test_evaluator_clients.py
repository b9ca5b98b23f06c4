"""
Tests for the evaluation backend client

Uses httpx.MockTransport to check request shape, authentication headers,
reply decoding and error wrapping without a live backend.
"""

import json

import httpx
import pytest

from graphomotor_eval.infrastructure.evaluator_clients.backend import BackendEvaluatorClient
from graphomotor_eval.infrastructure.evaluator_clients.base import (
    EvaluatorTransportError,
    env_token,
    static_token,
)
from graphomotor_eval.infrastructure.evaluator_clients.factory import create_client
from graphomotor_eval.service_config import BackendConfig, ServiceConfig


BASE_URL = "http://backend.test"


def _client(handler, token="secret-token"):
    return BackendEvaluatorClient(
        BASE_URL,
        static_token(token),
        timeout_seconds=5.0,
        transport=httpx.MockTransport(handler),
    )


class TestCredentialProviders:

    def test_static_token(self):
        assert static_token("abc")() == "abc"
        assert static_token(None)() is None

    def test_env_token_reads_on_each_call(self, monkeypatch):
        provider = env_token("GRAPHO_TEST_TOKEN")
        monkeypatch.delenv("GRAPHO_TEST_TOKEN", raising=False)
        assert provider() is None
        monkeypatch.setenv("GRAPHO_TEST_TOKEN", "later")
        assert provider() == "later"


class TestSubmit:

    @pytest.mark.asyncio
    async def test_request_shape(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True, "data": "{}"})

        body = {"prompt": "Evalúa", "coordenadas": {}, "configuracion": {"modelo": "gpt-4"}}
        await _client(handler).submit(body)

        assert seen["method"] == "POST"
        assert seen["url"] == f"{BASE_URL}/api/evaluaciones/chatgpt"
        assert seen["headers"]["content-type"] == "application/json"
        assert seen["headers"]["authorization"] == "Bearer secret-token"
        assert seen["body"] == body

    @pytest.mark.asyncio
    async def test_missing_token_omits_authorization(self):
        seen = {}

        def handler(request):
            seen["headers"] = request.headers
            return httpx.Response(200, json={"success": True, "data": "{}"})

        await _client(handler, token=None).submit({})
        assert "authorization" not in seen["headers"]

    @pytest.mark.asyncio
    async def test_decodes_success_reply(self):
        def handler(request):
            return httpx.Response(200, json={
                "success": True,
                "data": '{"puntuacion": 80}',
                "metadata": {"tokensUsed": 512},
            })

        response = await _client(handler).submit({})
        assert response.success is True
        assert response.data == '{"puntuacion": 80}'
        assert response.tokens_used == 512
        assert response.error is None

    @pytest.mark.asyncio
    async def test_decoded_data_is_reencoded(self):
        def handler(request):
            return httpx.Response(200, json={"success": True, "data": {"puntuacion": 80}})

        response = await _client(handler).submit({})
        assert json.loads(response.data) == {"puntuacion": 80}

    @pytest.mark.asyncio
    async def test_backend_reported_failure(self):
        def handler(request):
            return httpx.Response(200, json={"success": False, "error": "Quota exceeded"})

        response = await _client(handler).submit({})
        assert response.success is False
        assert response.error == "Quota exceeded"
        assert response.tokens_used is None

    @pytest.mark.asyncio
    async def test_non_string_error_coerced(self):
        def handler(request):
            return httpx.Response(200, json={"success": False, "error": {"code": 429}})

        response = await _client(handler).submit({})
        assert response.error == "{'code': 429}"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_tokens,expected", [
        (512, 512),
        (512.0, 512),
        ("640", 640),
        ("many", None),
        ({"prompt": 10}, None),
        (True, None),
        (-5, None),
        (12.5, None),
    ])
    async def test_token_count_coerced(self, raw_tokens, expected):
        def handler(request):
            return httpx.Response(200, json={
                "success": True,
                "data": "{}",
                "metadata": {"tokensUsed": raw_tokens},
            })

        response = await _client(handler).submit({})
        assert response.tokens_used == expected

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        def handler(request):
            return httpx.Response(503)

        with pytest.raises(EvaluatorTransportError, match="Server error: 503 Service Unavailable"):
            await _client(handler).submit({})

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(EvaluatorTransportError, match="non-JSON"):
            await _client(handler).submit({})

    @pytest.mark.asyncio
    async def test_connection_error_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(EvaluatorTransportError, match="connection refused"):
            await _client(handler).submit({})


class TestStatusAndStatistics:

    @pytest.mark.asyncio
    async def test_status_ok(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["method"] = request.method
            return httpx.Response(200, json={"status": "ok"})

        assert await _client(handler).check_status() is True
        assert seen == {"path": "/api/evaluaciones/chatgpt/status", "method": "GET"}

    @pytest.mark.asyncio
    async def test_status_not_ok(self):
        assert await _client(lambda request: httpx.Response(500)).check_status() is False

    @pytest.mark.asyncio
    async def test_statistics_body(self):
        def handler(request):
            assert request.url.path == "/api/evaluaciones/chatgpt/stats"
            return httpx.Response(200, json={"totalEvaluaciones": 4})

        assert await _client(handler).fetch_statistics() == {"totalEvaluaciones": 4}

    @pytest.mark.asyncio
    async def test_statistics_error_status(self):
        assert await _client(lambda request: httpx.Response(401)).fetch_statistics() is None

    @pytest.mark.asyncio
    async def test_statistics_non_json(self):
        assert await _client(lambda request: httpx.Response(200, text="nope")).fetch_statistics() is None


class TestCreateClient:

    def test_uses_backend_config(self, monkeypatch):
        monkeypatch.setenv("CLINIC_TOKEN", "from-env")
        config = ServiceConfig(backend=BackendConfig(
            base_url="https://clinic.example.org/",
            token_env_var="CLINIC_TOKEN",
            timeout_seconds=12.0,
        ))
        client = create_client(config)
        assert isinstance(client, BackendEvaluatorClient)
        assert client.base_url == "https://clinic.example.org"
        assert client.timeout_seconds == 12.0
        assert client._credential_provider() == "from-env"

    def test_explicit_credential_provider(self):
        client = create_client(ServiceConfig(), credential_provider=static_token("explicit"))
        assert client._credential_provider() == "explicit"
