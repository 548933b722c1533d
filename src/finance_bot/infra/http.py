"""POST JSON assíncrono (httpx) para as respostas do bot.

Uma tentativa por chamada. Rede fora do ar ou timeout viram HttpError;
o status da resposta fica com quem chama (a Graph API devolve o erro no corpo).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from finance_bot.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


class HttpError(Exception):
    """Falha ao entregar uma chamada HTTP (sem token, número ou texto)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


def is_transient_status(status_code: int) -> bool:
    """429 e 5xx: o mesmo envio pode funcionar mais tarde."""
    return status_code == 429 or status_code >= 500


class HttpClient:
    """Cliente httpx preguiçoso: abre no primeiro POST, fecha em close().

    transport permite injetar httpx.MockTransport em testes.
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.headers = dict(headers or {})
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _open(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout_seconds,
                headers=self.headers,
                transport=self._transport,
            )
        return self._client

    async def post_json(
        self,
        url: str,
        payload: Mapping[str, Any],
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Envia payload como JSON e devolve a resposta, qualquer que seja o status.

        Raises:
            HttpError: Timeout ou falha de rede (retentável)
        """
        path = httpx.URL(url).path
        try:
            response = await self._open().post(url, json=dict(payload), headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning("Outbound POST timed out", extra={"path": path})
            raise HttpError("Timeout", is_retryable=True) from exc
        except httpx.RequestError as exc:
            logger.warning(
                "Outbound POST network failure",
                extra={"path": path, "error_type": type(exc).__name__},
            )
            raise HttpError(f"Falha de rede: {type(exc).__name__}", is_retryable=True) from exc

        logger.debug(
            "Outbound POST answered",
            extra={"path": path, "status_code": response.status_code},
        )
        return response

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
