# 📄 File: app/modules/membership/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# Lists the storage contracts for every kind of membership record.
# 🧪 Purpose (Technical Summary):
# Re-exports the repository interfaces composed by the unit of work.
# 🔗 Dependencies:
# Repository interface modules
# 🔄 Connected Modules / Calls From:
# Unit of work, in-memory and SQLAlchemy implementations

from .club_membership_repository import ClubMembershipRepository
from .club_repository import ClubRepository
from .club_request_repository import ClubRequestRepository
from .enrollment_request_repository import EnrollmentRequestRepository
from .family_repository import FamilyRepository
from .tournament_repository import TournamentRepository
from .training_repository import TrainingRepository
from .transaction_repository import TransactionRepository
from .user_repository import UserRepository

__all__ = [
    "ClubMembershipRepository",
    "ClubRepository",
    "ClubRequestRepository",
    "EnrollmentRequestRepository",
    "FamilyRepository",
    "TournamentRepository",
    "TrainingRepository",
    "TransactionRepository",
    "UserRepository",
]
