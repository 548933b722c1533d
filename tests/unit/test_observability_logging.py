"""Testes para logging estruturado e máscara de remetente."""

from __future__ import annotations

import io
import json
import logging

from finance_bot.observability.logging import (
    ServiceContextFilter,
    build_json_handler,
    mask_sender,
)


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("finance_bot.test", logging.INFO, __file__, 1, "msg", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestMaskSender:
    """Testes para mask_sender."""

    def test_keeps_last_four_digits(self) -> None:
        """Apenas os 4 últimos dígitos aparecem."""
        assert mask_sender("201050239220") == "***9220"

    def test_empty_sender(self) -> None:
        """Remetente ausente vira 'unknown'."""
        assert mask_sender(None) == "unknown"
        assert mask_sender("") == "unknown"


class TestServiceContextFilter:
    """Testes para ServiceContextFilter."""

    def test_injects_service_context(self) -> None:
        """Fora de request, correlation_id fica vazio."""
        record = _record()

        assert ServiceContextFilter("finance_bot", "staging").filter(record) is True
        assert record.service == "finance_bot"
        assert record.environment == "staging"
        assert record.correlation_id == ""

    def test_preserves_explicit_correlation_id(self) -> None:
        """correlation_id passado via extra é mantido."""
        record = _record(correlation_id="explicit")

        ServiceContextFilter("finance_bot").filter(record)

        assert record.correlation_id == "explicit"


class TestJsonHandler:
    """Testes para o handler JSON."""

    def test_emits_one_json_object_per_record(self) -> None:
        """Linha traz campos renomeados, contexto e extras."""
        stream = io.StringIO()
        handler = build_json_handler("finance_bot", "production", stream=stream)

        handler.handle(_record(sender="***9220"))

        line = json.loads(stream.getvalue())
        assert line["level"] == "INFO"
        assert line["logger"] == "finance_bot.test"
        assert line["message"] == "msg"
        assert line["service"] == "finance_bot"
        assert line["environment"] == "production"
        assert line["sender"] == "***9220"
