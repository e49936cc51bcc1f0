"""Request/response audit logging middleware."""

import json
import logging
import socket
import time
from datetime import UTC, datetime

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("user_directory.audit")

ANONYMOUS = "Anonymous"
BUFFERED_METHODS = ("POST", "PUT")
REDACTED = "***"
SECRET_FIELDS = {"password"}


def redact_body(body: str) -> str:
    """Mask secret fields of a JSON object body. Other bodies are returned as-is."""
    try:
        payload = json.loads(body)
    except ValueError:
        return body
    if not isinstance(payload, dict):
        return body
    masked = {
        key: REDACTED if key.lower() in SECRET_FIELDS else value for key, value in payload.items()
    }
    return json.dumps(masked)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Emit exactly one audit record per request, whatever the outcome.

    The inner response is read fully into memory and replayed unchanged, so
    the logger can observe it without altering what the client receives.
    Exceptions from the inner app are logged and re-raised as-is.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_time = datetime.now(UTC)
        started = time.perf_counter()

        request_body = ""
        if request.method in BUFFERED_METHODS:
            # Starlette caches the body, the route still receives it
            request_body = redact_body((await request.body()).decode("utf-8", errors="replace"))

        status_code = 500
        try:
            response = await call_next(request)
            body = b"".join([chunk async for chunk in response.body_iterator])
            status_code = response.status_code

            buffered = Response(content=body, status_code=status_code)
            buffered.raw_headers = response.raw_headers
            return buffered
        except Exception:
            logger.exception("An unhandled exception has occurred while executing the request.")
            raise
        finally:
            duration_ms = int((time.perf_counter() - started) * 1000)
            self.log_request(request, request_time, request_body, status_code, duration_ms)

    def log_request(
        self,
        request: Request,
        request_time: datetime,
        request_body: str,
        status_code: int,
        duration_ms: int,
    ) -> None:
        audit = {
            "request_time": request_time.isoformat(),
            "client_ip": request.client.host if request.client else None,
            "client_name": getattr(request.state, "client_name", ANONYMOUS),
            "host_name": socket.gethostname(),
            "method": request.method,
            "path": request.url.path,
            "query_string": request.url.query,
            "request_body": request_body,
            "response_status_code": status_code,
            "duration_ms": duration_ms,
        }

        if status_code >= 500:
            logger.error(f"Request processed with error: {audit}", extra={"audit": audit})
        else:
            logger.info(f"Request processed successfully: {audit}", extra={"audit": audit})
