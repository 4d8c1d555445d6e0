"""
SQLAlchemy Implementation of User Repository.
"""

from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError

from courseload.core.exceptions import DuplicateError
from courseload.domain.enums import Role
from courseload.domain.models.user import User
from courseload.domain.repositories.user_repository import UserRepository
from courseload.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def list_by_role(self, role: Role) -> List[User]:
        return self.db.query(User).filter(User.role == role).order_by(User.id).all()

    def create(self, obj_in: Any) -> User:
        # The unique index on email is the final word on duplicates
        try:
            return super().create(obj_in)
        except IntegrityError as exc:
            raise DuplicateError("Email is already registered.") from exc
