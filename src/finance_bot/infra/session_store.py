"""Factory de SessionStore conforme backend configurado."""

from __future__ import annotations

import logging

from finance_bot.config.settings import SESSION_STORE_BACKENDS
from finance_bot.infra.session_contract import SessionStore
from finance_bot.infra.session_store_memory import InMemorySessionStore
from finance_bot.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


def create_session_store(backend: str = "memory") -> SessionStore:
    """Cria o SessionStore do backend informado.

    Raises:
        ValueError: Se o backend não for suportado
    """
    normalized = backend.lower()
    if normalized not in SESSION_STORE_BACKENDS:
        raise ValueError(f"Backend de sessão não suportado: {backend}")

    logger.info("Session store created", extra={"backend": normalized})
    return InMemorySessionStore()
