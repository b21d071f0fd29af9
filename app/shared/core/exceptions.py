# 📄 File: app/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types the membership API uses to say
# what went wrong (missing club, wrong state, no permission, broken database) in a
# clear, organized way instead of generic error messages.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy separating domain errors (not-found, invalid-operation,
# forbidden, conflict, optimistic lock) from infrastructure errors (database,
# transaction, messaging). Every exception carries an HTTP status code, an error code
# and details so HTTP handlers and queue consumers can apply one mapping table.
# 🔗 Dependencies:
# typing, FastAPI HTTP status constants
# 🔄 Connected Modules / Calls From:
# Domain aggregates, command handlers, unit of work implementations,
# app.api.middleware.error_handling, app.shared.events.consumer

from typing import Any, Dict, Optional
from fastapi import status


class NCFCAException(Exception):
    """
    Base exception class for the membership application.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "status_code": self.status_code
        }


# =============================================================================
# DOMAIN EXCEPTIONS
# =============================================================================

class DomainException(NCFCAException):
    """
    Exception raised when a business rule of an aggregate is violated.
    Subclasses narrow the kind (validation, not-found, invalid-operation).
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status_code,
            details=details,
            error_code=error_code or "DOMAIN_ERROR"
        )


class DomainValidationError(DomainException):
    """
    Exception raised when a value handed to an aggregate is malformed.
    Used for short rejection reasons, weak passwords, bad dates, etc.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if field:
            details["field"] = field

        super().__init__(
            message=message,
            details=details,
            error_code="DOMAIN_VALIDATION_ERROR"
        )


class EntityNotFoundError(DomainException):
    """
    Exception raised when a referenced aggregate does not exist.
    Queue consumers treat it as an orphan message and discard it.
    """

    def __init__(
        self,
        entity: str,
        entity_id: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        details["entity"] = entity
        if entity_id is not None:
            details["entity_id"] = str(entity_id)

        if not message:
            message = f"{entity} not found"
            if entity_id is not None:
                message = f"{entity} with id {entity_id} not found"

        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            message=message,
            details=details,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="ENTITY_NOT_FOUND"
        )


class InvalidOperationError(DomainException):
    """
    Exception raised when a state-machine precondition is violated.
    Used for approving resolved requests, exceeding club capacity, etc.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            details=details,
            error_code=error_code or "INVALID_OPERATION"
        )


class RedundantOperationError(InvalidOperationError):
    """
    Exception raised when the requested change has already been applied.

    HTTP callers see it as an invalid operation; queue consumers treat it as
    a redelivery of an already processed message and discard it.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            details=details,
            error_code="REDUNDANT_OPERATION"
        )


# =============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# =============================================================================

class UnauthorizedError(NCFCAException):
    """
    Exception raised for missing or invalid credentials.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="UNAUTHORIZED"
        )


class ForbiddenError(NCFCAException):
    """
    Exception raised when the caller has no authority over the target aggregate.
    Used when a user who is not the club principal manages its enrollments.
    """

    def __init__(
        self,
        message: str = "Access denied",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        if user_id:
            details["user_id"] = user_id

        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code="FORBIDDEN"
        )


# =============================================================================
# CONFLICT EXCEPTIONS
# =============================================================================

class ConflictError(NCFCAException):
    """
    Exception raised for resource conflicts.
    Used when attempting to create duplicate resources or conflicting operations.
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        resource_type: Optional[str] = None,
        conflict_field: Optional[str] = None,
        existing_value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if conflict_field:
            details["conflict_field"] = conflict_field
        if existing_value is not None:
            details["existing_value"] = str(existing_value)

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="CONFLICT_ERROR"
        )


class OptimisticLockError(NCFCAException):
    """
    Exception raised when a versioned aggregate was modified concurrently.
    The caller must reload the aggregate and retry.
    """

    def __init__(
        self,
        entity: str,
        entity_id: str,
        expected_version: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        details["entity"] = entity
        details["entity_id"] = entity_id
        if expected_version is not None:
            details["expected_version"] = expected_version

        super().__init__(
            message=f"{entity} {entity_id} was modified by another operation",
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="OPTIMISTIC_LOCK_ERROR"
        )


# =============================================================================
# DATABASE & INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class InfrastructureError(NCFCAException):
    """
    Exception raised for persistence or transport failures unrelated to
    business rules. Never retried blindly.
    """

    def __init__(
        self,
        message: str = "Infrastructure error",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code=error_code or "INFRASTRUCTURE_ERROR"
        )


class DatabaseError(InfrastructureError):
    """
    Exception raised for database operation failures.
    Used for connection issues, query failures, etc.
    """

    def __init__(
        self,
        message: str = "Database error",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table

        super().__init__(
            message=message,
            details=details,
            error_code="DATABASE_ERROR"
        )


class TransactionError(InfrastructureError):
    """
    Exception raised when a transaction boundary is misused
    (nested transactions, commit without begin).
    """

    def __init__(
        self,
        message: str = "Transaction error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details=details,
            error_code="TRANSACTION_ERROR"
        )


class UnsupportedOperationError(InfrastructureError):
    """
    Exception raised by implementations that refuse part of an interface,
    such as manual transaction control on the relational unit of work.
    """

    def __init__(self, operation: str, implementation: str):
        super().__init__(
            message=f"{operation} is not supported by {implementation}",
            details={"operation": operation, "implementation": implementation},
            error_code="UNSUPPORTED_OPERATION"
        )


class MessagingError(InfrastructureError):
    """
    Exception raised when an event cannot be handed to the message broker.
    """

    def __init__(
        self,
        message: str = "Message broker error",
        queue: Optional[str] = None,
        event_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if queue:
            details["queue"] = queue
        if event_type:
            details["event_type"] = event_type

        super().__init__(
            message=message,
            details=details,
            error_code="MESSAGING_ERROR"
        )

