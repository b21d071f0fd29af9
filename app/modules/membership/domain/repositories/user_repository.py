# 📄 File: app/modules/membership/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how to save and find users without saying which
# database is used.
# 🧪 Purpose (Technical Summary):
# Repository interface for the User aggregate following the Repository pattern and
# dependency inversion principle.
# 🔗 Dependencies:
# Domain models (User), typing, abc
# 🔄 Connected Modules / Calls From:
# Unit of work, application handlers, infrastructure implementations

from abc import ABC, abstractmethod
from typing import Optional

from ..models.user import User


class UserRepository(ABC):
    """
    Repository interface for User entity data access operations.

    Implementation Notes:
    - Concrete implementations are in infrastructure layer
    - Methods return detached domain entities, not database models
    - All operations are async for non-blocking I/O
    """

    @abstractmethod
    async def find(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ID to find

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address (case insensitive).

        Args:
            email: Email address to search

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """
        Insert or update a user.

        Raises:
            ConflictError: If another user already has the email
        """
        pass
