"""Logs JSON do finance_bot.

Cada linha carrega service, environment e o correlation_id do webhook em
curso. Texto de mensagens e números completos não entram nos logs: use
mask_sender para identificar o remetente.
"""

from __future__ import annotations

import logging
from typing import IO

from pythonjsonlogger.json import JsonFormatter

from finance_bot.observability.middleware import get_correlation_id

_LOG_FIELDS = (
    "asctime", "levelname", "name", "message",
    "correlation_id", "service", "environment",
)


class ServiceContextFilter(logging.Filter):
    """Completa o record com o contexto do serviço.

    Um correlation_id passado via extra tem precedência sobre o do request.
    """

    def __init__(self, service_name: str, environment: str = "development") -> None:
        super().__init__()
        self.service_name = service_name
        self.environment = environment

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        if not getattr(record, "correlation_id", None):
            record.correlation_id = get_correlation_id()
        record.service = self.service_name
        record.environment = self.environment
        return True


def build_json_handler(
    service_name: str,
    environment: str = "development",
    stream: IO[str] | None = None,
) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        JsonFormatter(
            " ".join(f"%({field})s" for field in _LOG_FIELDS),
            rename_fields={"levelname": "level", "name": "logger"},
        )
    )
    handler.addFilter(ServiceContextFilter(service_name, environment))
    return handler


def configure_logging(level: str, service_name: str, environment: str = "development") -> None:
    """Substitui os handlers do root logger por um único handler JSON."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers = [build_json_handler(service_name, environment)]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def mask_sender(sender_id: str | None) -> str:
    """Mascara o remetente para logs: "201050239220" -> "***9220"."""
    if not sender_id:
        return "unknown"
    return "***" + sender_id[-4:]
