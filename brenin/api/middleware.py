"""
API middleware
"""
import re
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from brenin.utils.logger import get_logger

logger = get_logger(__name__)

SESSION_IN_PATH = re.compile(r"/chat/\w+/(sess_[0-9a-f]{12})")


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request and one per response. Each request gets an
    X-Request-ID (the caller's, if sent) so both lines can be matched, and
    chat routes carrying a session id in the path log it too.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        started = time.perf_counter()

        route = f"{request.method} {request.url.path}"
        match = SESSION_IN_PATH.search(request.url.path)
        if match:
            route += f" [{match.group(1)}]"

        logger.info(f"[{request_id}] -> {route}")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"[{request_id}] !! {route} - {str(e)} ({time.perf_counter() - started:.3f}s)")
            raise

        elapsed = time.perf_counter() - started
        logger.info(f"[{request_id}] <- {route} {response.status_code} ({elapsed:.3f}s)")

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        return response
