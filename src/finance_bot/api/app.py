"""Fábrica da aplicação FastAPI."""

from __future__ import annotations

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from finance_bot.adapters.whatsapp.http_client import create_whatsapp_http_client
from finance_bot.adapters.whatsapp.outbound import DisabledSender, WhatsAppTextSender
from finance_bot.api.routes import router
from finance_bot.application.dialogue import DialogueEngine
from finance_bot.application.dispatcher import InboundDispatcher
from finance_bot.config.settings import Settings, get_settings
from finance_bot.domain.protocols import MessageSender
from finance_bot.infra.session_store import create_session_store
from finance_bot.observability.logging import configure_logging, get_logger
from finance_bot.observability.middleware import CorrelationIdMiddleware

logger = get_logger(__name__)


def _create_sender(settings: Settings) -> MessageSender:
    """Cria o sender real quando há credenciais; senão, envio desabilitado."""
    if not settings.whatsapp_access_token or not settings.whatsapp_phone_number_id:
        logger.warning("WhatsApp credentials missing, outbound sending disabled")
        return DisabledSender()

    return WhatsAppTextSender(create_whatsapp_http_client(settings))


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Finance bot started", extra={"port": app.state.settings.port})
    yield
    sender = app.state.sender
    if isinstance(sender, WhatsAppTextSender):
        await sender.close()


def create_app(
    settings: Settings | None = None,
    sender: MessageSender | None = None,
) -> FastAPI:
    """Cria a aplicação FastAPI.

    sender permite injetar um MessageSender alternativo (testes).
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.service_name, settings.environment)

    validation_errors = settings.collect_validation_errors()
    if validation_errors:
        error_msg = "; ".join(validation_errors)
        raise ValueError(f"Configuração inválida: {error_msg}")

    app = FastAPI(title=settings.service_name, version=settings.version, lifespan=_lifespan)
    app.add_middleware(CorrelationIdMiddleware, header_name=settings.correlation_id_header)
    app.include_router(router)

    store = create_session_store(settings.session_store_backend)
    engine = DialogueEngine(
        student_count_min=settings.student_count_min,
        student_count_max=settings.student_count_max,
    )
    sender = sender or _create_sender(settings)

    app.state.settings = settings
    app.state.session_store = store
    app.state.sender = sender
    app.state.dispatcher = InboundDispatcher(store=store, engine=engine, sender=sender)
    app.state.started_at = time.monotonic()

    return app


# Instância padrão para uvicorn
app = create_app()
