"""SQLAlchemy models."""

from user_directory.models.api_client import ApiClient
from user_directory.models.user import User

__all__ = [
    "ApiClient",
    "User",
]
