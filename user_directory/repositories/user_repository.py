"""Persistence and retrieval of user records."""

from sqlalchemy.orm import Session

from user_directory.models.user import User


class UserRepository:
    """Data-access layer for users.

    Every write commits immediately, so each call is atomic over a single row.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        """Return the user with this email.

        Raises ``MultipleResultsFound`` if the email is not unique.
        """
        return self.db.query(User).filter(User.email == email).one_or_none()

    def username_exists(self, username: str) -> bool:
        return self.db.query(User.id).filter(User.username == username).first() is not None

    def list_all(self) -> list[User]:
        return self.db.query(User).all()

    def add(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: User) -> User:
        """Persist in-place changes to an already loaded user."""
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.commit()
