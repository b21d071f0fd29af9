# 📄 File: app/modules/membership/domain/repositories/enrollment_request_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how enrollment requests of dependants into clubs are stored and found.
# 🧪 Purpose (Technical Summary):
# Repository interface for the EnrollmentRequest aggregate. Implementations
# refuse a second PENDING request for the same (dependant, club) pair.
# 🔗 Dependencies:
# Domain models (EnrollmentRequest), typing, abc
# 🔄 Connected Modules / Calls From:
# Unit of work, enrollment handlers

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.enrollment_request import EnrollmentRequest


class EnrollmentRequestRepository(ABC):
    """Repository interface for EnrollmentRequest aggregates."""

    @abstractmethod
    async def find(self, request_id: str) -> Optional[EnrollmentRequest]:
        pass

    @abstractmethod
    async def find_by_dependant_and_club(self, dependant_id: str, club_id: str) -> List[EnrollmentRequest]:
        """Every request ever made for the pair, any status."""
        pass

    @abstractmethod
    async def find_pending_by_club(self, club_id: str) -> List[EnrollmentRequest]:
        pass

    @abstractmethod
    async def find_by_family(self, family_id: str) -> List[EnrollmentRequest]:
        pass

    @abstractmethod
    async def save(self, request: EnrollmentRequest) -> EnrollmentRequest:
        """
        Insert or update an enrollment request.

        Raises:
            ConflictError: If another PENDING request exists for the same
                dependant and club
        """
        pass
