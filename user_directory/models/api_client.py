"""API client model."""

from sqlalchemy import Column, Integer, String

from user_directory.database import Base


class ApiClient(Base):
    """Registered caller of the API, identified by a static key.

    Rows are provisioned out-of-band (see ``scripts/seed_api_client.py``).
    """

    __tablename__ = "api_clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    api_key = Column(String(100), unique=True, nullable=False, index=True)
