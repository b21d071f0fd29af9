# 📄 File: app/modules/membership/domain/repositories/club_request_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how requests to open a club are stored and listed.
# 🧪 Purpose (Technical Summary):
# Repository interface for the ClubRequest aggregate.
# 🔗 Dependencies:
# Domain models (ClubRequest), typing, abc
# 🔄 Connected Modules / Calls From:
# Unit of work, club request handlers, create_club handler

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.club_request import ClubRequest


class ClubRequestRepository(ABC):
    """Repository interface for ClubRequest aggregates."""

    @abstractmethod
    async def find(self, request_id: str) -> Optional[ClubRequest]:
        pass

    @abstractmethod
    async def find_by_requester_id(self, requester_id: str) -> List[ClubRequest]:
        """All requests of a user, newest first."""
        pass

    @abstractmethod
    async def find_pending(self) -> List[ClubRequest]:
        """PENDING requests, oldest first."""
        pass

    @abstractmethod
    async def save(self, request: ClubRequest) -> ClubRequest:
        pass
