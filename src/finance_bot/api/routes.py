"""Rotas HTTP: status do bot e webhook WhatsApp."""

from __future__ import annotations

import hmac
import json
import time
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import PlainTextResponse

from finance_bot.adapters.whatsapp.normalizer import extract_inbound_messages
from finance_bot.adapters.whatsapp.signature import SignatureResult, verify_meta_signature
from finance_bot.api.dependencies import (
    get_dispatcher,
    get_session_store,
    get_settings,
    get_started_at,
)
from finance_bot.application.dispatcher import InboundDispatcher
from finance_bot.config.settings import Settings
from finance_bot.domain.messages import InboundMessage
from finance_bot.infra.http import HttpError
from finance_bot.infra.session_contract import SessionStore
from finance_bot.observability.logging import get_logger, mask_sender
from finance_bot.observability.middleware import get_correlation_id

logger = get_logger(__name__)

router = APIRouter()


def _now_iso() -> str:
    return datetime.now(tz=UTC).isoformat()


@router.get("/")
def root(store: SessionStore = Depends(get_session_store)) -> dict[str, Any]:
    """Ping simples usado por monitores de uptime."""
    return {
        "status": "WhatsApp bot is alive!",
        "timestamp": _now_iso(),
        "sessions": len(store),
    }


@router.get("/health")
def health(
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
) -> dict[str, Any]:
    return {
        "status": "ok",
        "message": "WhatsApp bot is running",
        "timestamp": _now_iso(),
        "activeSessions": len(store),
        "service": settings.service_name,
        "version": settings.version,
    }


@router.get("/status")
def bot_status(
    store: SessionStore = Depends(get_session_store),
    started_at: float = Depends(get_started_at),
) -> dict[str, Any]:
    """Estado do bot e uptime em segundos."""
    return {
        "botStatus": "running",
        "activeSessions": len(store),
        "uptime": round(time.monotonic() - started_at, 3),
        "timestamp": _now_iso(),
    }


@router.get("/webhooks/whatsapp", response_class=PlainTextResponse)
def whatsapp_verify(
    mode: str | None = Query(None, alias="hub.mode"),
    token: str | None = Query(None, alias="hub.verify_token"),
    challenge: str = Query("", alias="hub.challenge"),
    settings: Settings = Depends(get_settings),
) -> str:
    """Handshake da Meta ao registrar o webhook: devolve hub.challenge."""
    expected = settings.whatsapp_verify_token
    if not expected:
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, detail="missing_verify_token")

    if mode != "subscribe" or not hmac.compare_digest((token or "").encode(), expected.encode()):
        logger.warning("webhook_verification_rejected", extra={"mode": mode})
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail="verification_failed")

    return challenge


async def _read_signed_payload(
    request: Request, settings: Settings
) -> tuple[dict[str, Any], SignatureResult]:
    """Corpo do webhook já autenticado e decodificado.

    Raises:
        HTTPException: 401 para assinatura inválida, 400 para corpo inválido
    """
    raw_body = await request.body()
    signature = verify_meta_signature(raw_body, request.headers, settings.whatsapp_webhook_secret)
    if not signature.valid:
        logger.warning("webhook_signature_invalid", extra={"error": signature.error})
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="invalid_signature")

    try:
        payload = json.loads(raw_body or b"{}")
    except json.JSONDecodeError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="invalid_json") from exc
    if not isinstance(payload, dict):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="invalid_payload")

    return payload, signature


async def _dispatch_in_order(
    dispatcher: InboundDispatcher, messages: list[InboundMessage]
) -> tuple[int, int]:
    """Entrega cada mensagem ao dispatcher; devolve (processadas, falhas de envio)."""
    processed = failed = 0
    for message in messages:
        try:
            await dispatcher.handle(message)
        except HttpError:
            failed += 1
            logger.error(
                "inbound_reply_failed",
                extra={"sender": mask_sender(message.sender_id), "message_id": message.message_id},
            )
        else:
            processed += 1
    return processed, failed


@router.post("/webhooks/whatsapp")
async def whatsapp_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    dispatcher: InboundDispatcher = Depends(get_dispatcher),
) -> dict[str, Any]:
    """Recebe eventos do WhatsApp e processa cada mensagem em ordem.

    Falhas de envio aparecem em "failed"; a Meta recebe 200 mesmo assim e
    não reenvia o evento.
    """
    payload, signature = await _read_signed_payload(request, settings)
    messages = extract_inbound_messages(payload)
    processed, failed = await _dispatch_in_order(dispatcher, messages)

    return {
        "ok": True,
        "received": len(messages),
        "processed": processed,
        "failed": failed,
        "correlation_id": get_correlation_id(),
        "signature_validated": not signature.skipped,
        "signature_skipped": signature.skipped,
    }
