"""Correlation id por request HTTP.

Reaproveita o id recebido no header configurado ou gera um novo; o id fica
disponível para os logs durante o request e volta no header da resposta.
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

_request_correlation_id: ContextVar[str] = ContextVar("request_correlation_id", default="")


def get_correlation_id() -> str:
    """Id do request em curso; vazio fora de um request."""
    return _request_correlation_id.get()


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, header_name: str = "X-Correlation-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = request.headers.get(self.header_name) or uuid.uuid4().hex
        token = _request_correlation_id.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            _request_correlation_id.reset(token)
        response.headers[self.header_name] = correlation_id
        return response
