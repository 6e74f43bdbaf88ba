"""Initialise logging and tracing middleware."""

from __future__ import annotations

import logging
import uuid

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from crockid.config import Settings
from crockid.obs.redaction import RedactingFilter

_HANDLER_NAME = "crockid"


class _TraceIdMiddleware(BaseHTTPMiddleware):
    """Attach a ``X-Trace-Id`` header to every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = request.headers.get("x-trace-id", uuid.uuid4().hex)
        request.state.trace_id = trace_id
        response = await call_next(request)
        response.headers["X-Trace-Id"] = trace_id
        return response


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Attach a single redacting stderr handler to the ``crockid`` logger.

    Calling this more than once only updates the level and format.
    """
    if settings is None:
        settings = Settings()

    root = logging.getLogger("crockid")
    root.setLevel(settings.effective_log_level())

    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.addFilter(RedactingFilter())
        root.addHandler(handler)
    handler.setFormatter(logging.Formatter(settings.log_format))
    return root


def init_observability(app: FastAPI, settings: Settings | None = None) -> None:
    """Wire up logging and the trace-id middleware for *app*."""
    configure_logging(settings)
    app.add_middleware(_TraceIdMiddleware)
