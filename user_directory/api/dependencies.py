"""FastAPI dependencies for services and API key documentation."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from user_directory.database import get_db
from user_directory.middleware.api_key import API_KEY_HEADER
from user_directory.services.user_service import UserService

# Enforcement happens in ApiKeyMiddleware; this only publishes the scheme in
# the OpenAPI document so the explorer can send the header.
api_key_scheme = APIKeyHeader(
    name=API_KEY_HEADER,
    description=f"API Key must be provided in header: {API_KEY_HEADER}",
    auto_error=False,
)


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db)
