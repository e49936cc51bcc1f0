"""Pydantic schemas for API requests and responses."""

from user_directory.schemas.user import (
    MessageResponse,
    PasswordValidate,
    UserCreate,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "PasswordValidate",
    "MessageResponse",
]
