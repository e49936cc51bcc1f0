"""API key authentication middleware."""

from collections.abc import Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from user_directory.config import Settings
from user_directory.repositories.api_client_repository import ApiClientRepository

API_KEY_HEADER = "X-Api-Key"

# Interactive API explorer, reachable without a key outside production
EXPLORER_PATHS = ("/docs", "/redoc", "/openapi.json")

MISSING_KEY_DETAIL = "API Key was not provided."
UNKNOWN_CLIENT_DETAIL = "Unauthorized client."


def _is_explorer_path(path: str) -> bool:
    return any(path == prefix or path.startswith(f"{prefix}/") for prefix in EXPLORER_PATHS)


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Reject requests whose ``X-Api-Key`` header is missing or not registered.

    On success the client's name is stored on ``request.state.client_name``
    for the request logger.
    """

    def __init__(
        self,
        app: ASGIApp,
        settings: Settings,
        session_factory: Callable[[], Session],
    ) -> None:
        super().__init__(app)
        self.settings = settings
        self.session_factory = session_factory

    def bypass_allowed(self, request: Request) -> bool:
        """Explorer requests skip the key check, in development only."""
        if not self.settings.is_development or not self.settings.docs_bypass_enabled:
            return False
        if _is_explorer_path(request.url.path):
            return True
        # "Try it out" calls made from the explorer page
        referer = request.headers.get("referer", "")
        return "/docs" in referer.lower()

    def find_client_name(self, api_key: str) -> str | None:
        db = self.session_factory()
        try:
            client = ApiClientRepository(db).get_by_key(api_key)
            return client.name if client else None
        finally:
            db.close()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self.bypass_allowed(request):
            return await call_next(request)

        api_key = request.headers.get(API_KEY_HEADER)
        if api_key is None:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": MISSING_KEY_DETAIL},
            )

        client_name = await run_in_threadpool(self.find_client_name, api_key)
        if client_name is None:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": UNKNOWN_CLIENT_DETAIL},
            )

        request.state.client_name = client_name
        return await call_next(request)
