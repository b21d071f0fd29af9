"""
Core package for the NCFCA Membership API.
Provides the exception hierarchy and the hashing and token services.
"""

from .exceptions import (
    ConflictError,
    DatabaseError,
    DomainException,
    DomainValidationError,
    EntityNotFoundError,
    ForbiddenError,
    InfrastructureError,
    InvalidOperationError,
    MessagingError,
    NCFCAException,
    OptimisticLockError,
    RedundantOperationError,
    TransactionError,
    UnauthorizedError,
    UnsupportedOperationError,
)
from .security import (
    HashingService,
    JWTTokenService,
    PasswordHasher,
    TokenPair,
    TokenPayload,
    TokenService,
)

__all__ = [
    # Exceptions
    "NCFCAException",
    "DomainException",
    "DomainValidationError",
    "EntityNotFoundError",
    "InvalidOperationError",
    "RedundantOperationError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "OptimisticLockError",
    "InfrastructureError",
    "DatabaseError",
    "TransactionError",
    "UnsupportedOperationError",
    "MessagingError",

    # Security
    "HashingService",
    "PasswordHasher",
    "TokenService",
    "JWTTokenService",
    "TokenPair",
    "TokenPayload",
]
