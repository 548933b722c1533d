"""Testes unitários para infra/http.py (POST JSON, uma tentativa)."""

from __future__ import annotations

import json

import httpx
import pytest

from finance_bot.infra.http import HttpClient, HttpError, is_transient_status

URL = "https://graph.facebook.com/v24.0/1/messages"


class TestTransientStatus:
    """Testes para is_transient_status."""

    @pytest.mark.parametrize("status", [429, 500, 503])
    def test_rate_limit_and_server_errors(self, status: int) -> None:
        """429 e 5xx podem dar certo mais tarde."""
        assert is_transient_status(status) is True

    @pytest.mark.parametrize("status", [400, 401, 403, 404])
    def test_client_errors(self, status: int) -> None:
        """4xx (exceto 429) não mudam com o tempo."""
        assert is_transient_status(status) is False


class TestHttpClient:
    """Testes para HttpClient com httpx.MockTransport."""

    @pytest.mark.asyncio
    async def test_post_json_sends_body_and_headers(self) -> None:
        """Corpo vai como JSON; headers base e da chamada são combinados."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        client = HttpClient(
            headers={"User-Agent": "finance_bot/0.1.0"},
            transport=httpx.MockTransport(handler),
        )
        async with client:
            response = await client.post_json(URL, {"a": 1}, headers={"Authorization": "Bearer t"})

        assert response.json() == {"ok": True}
        request = seen[0]
        assert request.method == "POST"
        assert json.loads(request.content) == {"a": 1}
        assert request.headers["user-agent"] == "finance_bot/0.1.0"
        assert request.headers["authorization"] == "Bearer t"

    @pytest.mark.asyncio
    async def test_error_status_is_returned_once(self) -> None:
        """Status de erro volta para quem chama, sem nova tentativa."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500)

        async with HttpClient(transport=httpx.MockTransport(handler)) as client:
            response = await client.post_json(URL, {})

        assert response.status_code == 500
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_connect_error_becomes_http_error(self) -> None:
        """Falha de conexão vira HttpError retentável."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with HttpClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(HttpError, match="ConnectError") as exc_info:
                await client.post_json(URL, {})

        assert exc_info.value.is_retryable is True
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_timeout_becomes_http_error(self) -> None:
        """Timeout vira HttpError retentável."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with HttpClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(HttpError, match="Timeout") as exc_info:
                await client.post_json(URL, {})

        assert exc_info.value.is_retryable is True

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self) -> None:
        """close pode ser chamado sem cliente aberto."""
        client = HttpClient()

        await client.close()
        await client.close()
