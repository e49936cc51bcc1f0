"""User directory operations: create, read, partial update, delete, password check."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from user_directory.models.user import User
from user_directory.repositories.user_repository import UserRepository
from user_directory.schemas.user import UserCreate, UserUpdate
from user_directory.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

USERNAME_TAKEN = "Username already exists."


def _username_conflict() -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=USERNAME_TAKEN)


class UserService:
    """Service for user record operations."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)

    def create_user(self, data: UserCreate) -> User:
        """Create a user, rejecting a username that is already taken."""
        if self.users.username_exists(data.username):
            raise _username_conflict()

        user = User(
            username=data.username,
            full_name=data.full_name,
            email=data.email,
            mobile=data.mobile,
            language=data.language,
            culture=data.culture,
            password_hash=hash_password(data.password),
        )
        try:
            self.users.add(user)
        except IntegrityError:
            # Lost the race against a concurrent create with the same username
            self.db.rollback()
            raise _username_conflict() from None

        logger.info(f"Created user {user.id} ({user.username})")
        return user

    def get_user(self, user_id: int) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
        return user

    def list_users(self) -> list[User]:
        return self.users.list_all()

    def update_user(self, data: UserUpdate) -> User:
        """
        Apply a partial update to the user matched by email.

        username, full_name and password change only when given a non-empty
        value. mobile, language and culture change whenever they are not None,
        so an empty string overwrites the stored value.
        """
        user = self.users.get_by_email(data.email)
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User with the specified email not found.",
            )

        if data.username and data.username != user.username:
            if self.users.username_exists(data.username):
                raise _username_conflict()
            logger.info(f"Renaming user {user.id}: '{user.username}' -> '{data.username}'")
            user.username = data.username

        if data.full_name:
            user.full_name = data.full_name

        if data.mobile is not None:
            user.mobile = data.mobile

        if data.language is not None:
            user.language = data.language

        if data.culture is not None:
            user.culture = data.culture

        if data.password:
            user.password_hash = hash_password(data.password)

        try:
            self.users.save(user)
        except IntegrityError:
            self.db.rollback()
            raise _username_conflict() from None

        return user

    def delete_user(self, user_id: int) -> None:
        user = self.get_user(user_id)
        self.users.delete(user)
        logger.info(f"Deleted user {user_id}")

    def validate_password(self, email: str, password: str) -> bool:
        """Check a clear-text password against the stored hash of the user with this email."""
        user = self.users.get_by_email(email)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
        return verify_password(password, user.password_hash)
