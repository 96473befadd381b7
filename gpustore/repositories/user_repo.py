# gpustore/repositories/user_repo.py
import uuid

from sqlmodel import Session

from gpustore.models.user import User


class UserRepository:
    """
    Data access layer for User.
    """

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

