# 📄 File: app/modules/membership/domain/repositories/tournament_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how tournaments and their registrations are stored, and makes sure two
# people editing the same tournament at once cannot overwrite each other.
# 🧪 Purpose (Technical Summary):
# Repository interface for the Tournament aggregate (with registrations and
# registration syncs) using optimistic locking on ``version``.
# 🔗 Dependencies:
# Domain models (Tournament), typing, abc
# 🔄 Connected Modules / Calls From:
# Unit of work, tournament and registration sync handlers

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.tournament import Tournament


class TournamentRepository(ABC):
    """Repository interface for Tournament aggregates."""

    @abstractmethod
    async def find(self, tournament_id: str) -> Optional[Tournament]:
        """Get a tournament by ID, soft-deleted ones included."""
        pass

    @abstractmethod
    async def find_by_registration_id(self, registration_id: str) -> Optional[Tournament]:
        pass

    @abstractmethod
    async def find_all(self, include_deleted: bool = False) -> List[Tournament]:
        """Tournaments ordered by start date."""
        pass

    @abstractmethod
    async def save(self, tournament: Tournament) -> Tournament:
        """
        Insert or update a tournament with its registrations.

        The stored version must equal ``tournament.version``; on success the
        version is incremented on both the row and the entity.

        Raises:
            OptimisticLockError: If the tournament changed since it was loaded
        """
        pass
