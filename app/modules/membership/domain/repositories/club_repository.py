# 📄 File: app/modules/membership/domain/repositories/club_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how clubs are stored, found by owner, and searched by name or city.
# 🧪 Purpose (Technical Summary):
# Repository interface for the Club aggregate. Implementations fill the derived
# ``corum`` with the number of ACTIVE memberships on every load.
# 🔗 Dependencies:
# Domain models (Club), typing, abc
# 🔄 Connected Modules / Calls From:
# Unit of work, club/enrollment handlers, infrastructure implementations

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..models.club import Club


class ClubRepository(ABC):
    """Repository interface for Club aggregates."""

    @abstractmethod
    async def find(self, club_id: str) -> Optional[Club]:
        pass

    @abstractmethod
    async def find_by_principal_id(self, principal_id: str) -> Optional[Club]:
        """
        Get the club administered by a user.

        Args:
            principal_id: User ID of the principal

        Returns:
            Club if the user owns one, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, club: Club) -> Club:
        pass

    @abstractmethod
    async def search(
        self,
        name: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Club], int]:
        """
        Search clubs by partial, case-insensitive name/city and exact state.

        Args:
            name: Name fragment
            city: City fragment
            state: Two letter state
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of the page items (ordered by name) and the total match count
        """
        pass
