#!/usr/bin/env python3
"""Seed an API client so callers can authenticate.

API clients are never created through the HTTP API; this script is the only
way to register one. Re-running it with an existing key is a no-op.

Usage:
    # Default test client (key: test-api-key-123)
    python scripts/seed_api_client.py

    # Custom client against another database:
    DATABASE_URL=postgresql://directory:directory@db/directory \
        API_CLIENT_NAME="Billing" API_CLIENT_KEY="..." \
        python scripts/seed_api_client.py
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.orm import sessionmaker

from user_directory.config import get_settings
from user_directory.database import build_engine, init_db
from user_directory.models import ApiClient

DATABASE_URL = os.getenv("DATABASE_URL", get_settings().database_url)

DEFAULT_CLIENT_NAME = "Test Client"
DEFAULT_API_KEY = "test-api-key-123"


def seed_api_client(name: str, api_key: str) -> None:
    """Create the API client unless the key is already registered."""
    engine = build_engine(DATABASE_URL)
    init_db(bind=engine)
    Session = sessionmaker(bind=engine)
    session = Session()

    try:
        existing = session.query(ApiClient).filter_by(api_key=api_key).first()
        if existing:
            print(f"API key already registered to '{existing.name}', nothing to do.")
            return

        session.add(ApiClient(name=name, api_key=api_key))
        session.commit()
        print(f"Registered API client '{name}'.")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    seed_api_client(
        os.getenv("API_CLIENT_NAME", DEFAULT_CLIENT_NAME),
        os.getenv("API_CLIENT_KEY", DEFAULT_API_KEY),
    )
