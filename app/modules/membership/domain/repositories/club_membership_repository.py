# 📄 File: app/modules/membership/domain/repositories/club_membership_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how club memberships are stored and counted.
# 🧪 Purpose (Technical Summary):
# Repository interface for ClubMembership entities.
# 🔗 Dependencies:
# Domain models (ClubMembership), typing, abc
# 🔄 Connected Modules / Calls From:
# Unit of work, enrollment handlers, club repositories (corum)

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.club_membership import ClubMembership


class ClubMembershipRepository(ABC):
    """Repository interface for ClubMembership entities."""

    @abstractmethod
    async def find(self, membership_id: str) -> Optional[ClubMembership]:
        pass

    @abstractmethod
    async def find_by_member_and_club(self, member_id: str, club_id: str) -> Optional[ClubMembership]:
        """The membership of a dependant in a club, whatever its status."""
        pass

    @abstractmethod
    async def find_active_by_club(self, club_id: str) -> List[ClubMembership]:
        pass

    @abstractmethod
    async def save(self, membership: ClubMembership) -> ClubMembership:
        pass
