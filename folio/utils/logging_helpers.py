"""Logging setup and per-request logging."""

import logging
import time

from fastapi import Request
from fastapi.responses import JSONResponse

from folio.errors import Internal

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("folio.http")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


async def log_requests(request: Request, call_next):
    """
    Log every request and turn unexpected failures into a 500 response.

    Storage errors and bugs are logged with their traceback here and the
    client only receives a generic ``Server Error`` message.
    """
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = Internal()
        response = JSONResponse(status_code=error.status_code, content=error.to_body())
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "%s %s -> %s (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response
