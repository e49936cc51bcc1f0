"""User schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

# camelCase on the wire, snake_case accepted too
_camel_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# bcrypt ignores everything past this many bytes
PASSWORD_MAX_BYTES = 72


def check_password_bytes(password: str | None) -> str | None:
    """Reject passwords bcrypt would silently truncate."""
    if password is not None and len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return password


class UserCreate(BaseModel):
    """Create a new user.

    Only the username must be unique. A second user may be created with an
    email that is already registered, after which update and password
    validation for that email fail with a server error, since both look the
    user up by email.
    """

    model_config = _camel_config

    username: str = Field(..., min_length=1, max_length=100)
    full_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr = Field(..., max_length=255)
    mobile: str = Field("", max_length=100)
    language: str = Field("", max_length=50)
    culture: str = Field("", max_length=50)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_BYTES)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_bytes(value)


class UserUpdate(BaseModel):
    """Partial update of a user, matched by email.

    ``username``, ``full_name`` and ``password`` are ignored when empty.
    ``mobile``, ``language`` and ``culture`` are applied whenever they are not
    null, so an empty string clears them.
    """

    model_config = _camel_config

    email: EmailStr = Field(..., max_length=255)
    username: str | None = Field(None, max_length=100)
    full_name: str | None = Field(None, max_length=200)
    mobile: str | None = Field(None, max_length=100)
    language: str | None = Field(None, max_length=50)
    culture: str | None = Field(None, max_length=50)
    password: str | None = Field(None, max_length=PASSWORD_MAX_BYTES)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str | None) -> str | None:
        return check_password_bytes(value)


class PasswordValidate(BaseModel):
    """Check a clear-text password against the stored hash."""

    model_config = _camel_config

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_BYTES)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return check_password_bytes(value)


class UserResponse(BaseModel):
    """Public view of a user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    username: str
    full_name: str
    email: str
    mobile: str
    language: str
    culture: str


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
