"""Lookup of registered API clients."""

from sqlalchemy.orm import Session

from user_directory.models.api_client import ApiClient


class ApiClientRepository:
    """Read-only access to API clients."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_key(self, api_key: str) -> ApiClient | None:
        """Find a client by exact API key match."""
        return self.db.query(ApiClient).filter(ApiClient.api_key == api_key).first()
