"""
User Repository Interface.
Credential store lookups used by auth, admin and notifications.
"""

from typing import List, Optional

from courseload.domain.enums import Role
from courseload.domain.models.user import User
from courseload.domain.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by (normalized) email."""
        ...

    def list_by_role(self, role: Role) -> List[User]:
        """Get every user holding the given role."""
        ...
