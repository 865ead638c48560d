"""
HTTP middleware: correlation IDs and request logging.

Every request gets a correlation ID (taken from the X-Correlation-ID header
or generated). It is stored in a ContextVar so CorrelationIdFilter can stamp
it on every log record emitted while the request is handled, and it is
echoed back in the response header.
"""
from contextvars import ContextVar
from typing import Optional
import logging
import time
import uuid

from fastapi import Request

CORRELATION_ID_HEADER = "X-Correlation-ID"

correlation_id_ctx: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

logger = logging.getLogger("app.request")


def get_correlation_id() -> Optional[str]:
    return correlation_id_ctx.get()


class CorrelationIdFilter(logging.Filter):
    """Adds record.correlation_id ("-" outside a request)"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_ctx.get() or "-"
        return True


async def correlation_id_middleware(request: Request, call_next):
    correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())
    token = correlation_id_ctx.set(correlation_id)
    try:
        response = await call_next(request)
        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
    finally:
        correlation_id_ctx.reset(token)


async def request_logging_middleware(request: Request, call_next):
    operation = f"{request.method} {request.url.path}"
    start = time.perf_counter()
    logger.info(f"→ Inbound HTTP request: {operation}")

    response = await call_next(request)

    latency_ms = (time.perf_counter() - start) * 1000
    outcome = "success" if response.status_code < 400 else "failure"
    logger.info(
        f"← Outbound HTTP response: {operation} {response.status_code} "
        f"({latency_ms:.1f}ms, {outcome})"
    )
    return response
