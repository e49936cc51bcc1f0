"""User model."""

from sqlalchemy import Column, Integer, String

from user_directory.database import Base


class User(Base):
    """Directory entry for a person. The hash never leaves the service layer."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    full_name = Column(String(200), nullable=False)
    # Lookup key for update/validate; not unique in the schema
    email = Column(String(255), nullable=False, index=True)
    mobile = Column(String(100), nullable=False, default="")
    language = Column(String(50), nullable=False, default="")
    culture = Column(String(50), nullable=False, default="")
    password_hash = Column(String(255), nullable=False)
