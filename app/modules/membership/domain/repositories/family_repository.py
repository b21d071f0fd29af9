# 📄 File: app/modules/membership/domain/repositories/family_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how families (and the dependants inside them) are stored and found.
# 🧪 Purpose (Technical Summary):
# Repository interface for the Family aggregate; dependants are persisted together
# with their family.
# 🔗 Dependencies:
# Domain models (Family), typing, abc
# 🔄 Connected Modules / Calls From:
# Unit of work, application handlers, infrastructure implementations

from abc import ABC, abstractmethod
from typing import Optional

from ..models.family import Family


class FamilyRepository(ABC):
    """Repository interface for Family aggregates."""

    @abstractmethod
    async def find(self, family_id: str) -> Optional[Family]:
        pass

    @abstractmethod
    async def find_by_holder_id(self, holder_id: str) -> Optional[Family]:
        """
        Get the family held by a user.

        Args:
            holder_id: User ID of the holder

        Returns:
            Family if the user holds one, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, family: Family) -> Family:
        """
        Insert or update a family and its dependants.

        Raises:
            ConflictError: If the holder already holds another family
        """
        pass
