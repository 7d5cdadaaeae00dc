"""Response envelope and per-request execution"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Dict

from fastapi import Request

from explorer.errors import ErrorKind, ExplorerError

logger = logging.getLogger(__name__)


def success(data: Any) -> Dict[str, Any]:
    return {"success": True, "data": data}


async def respond(request: Request, call: Awaitable[Any]) -> Dict[str, Any]:
    """
    Await an aggregator call under the configured request timeout and wrap
    the result in the success envelope.

    The timeout covers the whole call, every upstream request included.
    """
    settings = request.app.state.settings
    started = time.perf_counter()
    try:
        data = await asyncio.wait_for(call, timeout=settings.request_timeout)
    except asyncio.TimeoutError as exc:
        raise ExplorerError(
            ErrorKind.TIMEOUT, "Request processing timed out", code="request_timeout"
        ) from exc
    finally:
        duration = time.perf_counter() - started
        if duration > settings.slow_request_threshold:
            logger.warning(
                "Slow request detected: %s %s took %.2fs",
                request.method,
                request.url.path,
                duration,
            )
    return success(data)
