# authserver/core/logging.py

import logging
import sys
import time
import uuid
from typing import Any, List
import structlog
from structlog.types import Processor


# -------------------------------
# Configuration
# -------------------------------

def get_processors(json: bool = False) -> List[Processor]:
    shared_processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json:
        return shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return shared_processors + [structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    """
    Configures structlog on top of the stdlib logging module.
    Call once at application startup; later calls replace the configuration.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=get_processors(json),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> Any:
    return structlog.get_logger(name)


# -------------------------------
# Request logging
# -------------------------------

class RequestLoggingMiddleware:
    """ASGI middleware that logs each HTTP request and its outcome."""

    def __init__(self, app):
        self.app = app
        self.logger = get_logger("authserver.http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        structlog.contextvars.bind_contextvars(request_id=uuid.uuid4().hex[:8])
        start_time = time.perf_counter()
        method = scope.get("method", "")
        path = scope.get("path", "")
        status_code = 500

        self.logger.info("request_started", method=method, path=path)

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            log = self.logger.info
            if status_code >= 500:
                log = self.logger.error
            elif status_code >= 400:
                log = self.logger.warning

            log(
                "request_complete",
                method=method,
                path=path,
                status_code=status_code,
                duration_seconds=round(time.perf_counter() - start_time, 3),
            )
            structlog.contextvars.clear_contextvars()
