import logging
import sys
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("app.requests")


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once; repeated calls only adjust the level"""
    root = logging.getLogger()
    root.setLevel(level.upper())

    if not any(getattr(h, "_app_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._app_handler = True
        root.addHandler(handler)

    # Chroma and httpx are chatty at INFO
    logging.getLogger("chromadb").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status code and latency of every HTTP request"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = int((time.time() - start_time) * 1000)
            logger.exception(f"{request.method} {request.url.path} failed after {elapsed_ms} ms")
            raise

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms} ms)")
        return response
