"""Cliente da Graph API para POST /{phone_number_id}/messages.

Autentica com Bearer token e traduz o bloco "error" da Meta em
WhatsAppApiError (um HttpError, tratado pelo dispatcher como qualquer
falha de envio).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from finance_bot.infra.http import HttpClient, HttpError, is_transient_status
from finance_bot.observability.logging import get_logger

if TYPE_CHECKING:
    from finance_bot.config.settings import Settings

logger: logging.Logger = get_logger(__name__)

# Códigos da Cloud API que indicam limite de taxa ou indisponibilidade.
TRANSIENT_META_CODES: frozenset[int] = frozenset(
    {1, 2, 4, 80007, 130429, 131016, 131048, 131056}
)


@dataclass(frozen=True, slots=True)
class MetaError:
    """Bloco "error" de uma resposta da Graph API."""

    code: int
    error_type: str
    message: str

    @property
    def is_transient(self) -> bool:
        return self.code in TRANSIENT_META_CODES


class WhatsAppApiError(HttpError):
    """Envio recusado pela Graph API."""

    def __init__(self, status_code: int, meta_error: MetaError | None = None) -> None:
        if meta_error is None:
            is_retryable = is_transient_status(status_code)
            message = f"HTTP {status_code}"
        else:
            is_retryable = meta_error.is_transient or is_transient_status(status_code)
            message = f"Meta {meta_error.code} ({meta_error.error_type}): {meta_error.message}"
        super().__init__(message, status_code=status_code, is_retryable=is_retryable)
        self.meta_error = meta_error


def parse_meta_error(body: dict[str, Any]) -> MetaError | None:
    """Extrai o bloco "error"; None quando ausente ou malformado."""
    error = body.get("error")
    if not isinstance(error, dict):
        return None
    return MetaError(
        code=int(error.get("code") or 0),
        error_type=str(error.get("type") or "unknown"),
        message=str(error.get("message") or ""),
    )


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except json.JSONDecodeError:
        return {}
    return body if isinstance(body, dict) else {}


class WhatsAppHttpClient:
    """Publica payloads de mensagem no endpoint do número configurado."""

    def __init__(self, http: HttpClient, messages_endpoint: str, access_token: str) -> None:
        self._http = http
        self.messages_endpoint = messages_endpoint
        self._auth_headers = {"Authorization": f"Bearer {access_token}"}

    async def send_message(self, payload: dict[str, Any]) -> str:
        """Envia um payload e devolve o id (wamid) da mensagem criada.

        Raises:
            HttpError: Timeout ou falha de rede
            WhatsAppApiError: Status não-2xx ou erro Meta no corpo
        """
        response = await self._http.post_json(
            self.messages_endpoint, payload, headers=self._auth_headers
        )
        body = _json_body(response)
        meta_error = parse_meta_error(body)

        if response.is_success and meta_error is None:
            messages = body.get("messages") or [{}]
            return str(messages[0].get("id", "unknown"))

        error = WhatsAppApiError(response.status_code, meta_error)
        logger.warning(
            "Graph API rejected message",
            extra={
                "status_code": response.status_code,
                "meta_code": meta_error.code if meta_error else None,
                "is_retryable": error.is_retryable,
            },
        )
        raise error

    async def close(self) -> None:
        await self._http.close()


def create_whatsapp_http_client(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> WhatsAppHttpClient:
    """Monta o cliente a partir das credenciais do número."""
    http = HttpClient(
        timeout_seconds=settings.whatsapp_request_timeout_seconds,
        headers={"User-Agent": f"{settings.service_name}/{settings.version}"},
        transport=transport,
    )
    return WhatsAppHttpClient(
        http=http,
        messages_endpoint=settings.get_messages_endpoint(),
        access_token=settings.whatsapp_access_token or "",
    )
