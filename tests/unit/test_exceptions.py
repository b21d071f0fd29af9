import pytest

from app.shared.core.exceptions import (
    ConflictError,
    DatabaseError,
    DomainValidationError,
    EntityNotFoundError,
    ForbiddenError,
    InvalidOperationError,
    MessagingError,
    NCFCAException,
    OptimisticLockError,
    RedundantOperationError,
    TransactionError,
    UnauthorizedError,
    UnsupportedOperationError,
)


@pytest.mark.parametrize(
    "error, status_code, error_code",
    [
        (DomainValidationError("bad", field="reason"), 400, "DOMAIN_VALIDATION_ERROR"),
        (EntityNotFoundError("Club", "club-1"), 404, "ENTITY_NOT_FOUND"),
        (InvalidOperationError("no"), 400, "INVALID_OPERATION"),
        (RedundantOperationError("done"), 400, "REDUNDANT_OPERATION"),
        (UnauthorizedError(), 401, "UNAUTHORIZED"),
        (ForbiddenError(), 403, "FORBIDDEN"),
        (ConflictError(), 409, "CONFLICT_ERROR"),
        (OptimisticLockError("Tournament", "t-1", expected_version=2), 409, "OPTIMISTIC_LOCK_ERROR"),
        (DatabaseError(), 500, "DATABASE_ERROR"),
        (TransactionError(), 500, "TRANSACTION_ERROR"),
        (UnsupportedOperationError("commit", "SqlAlchemyUnitOfWork"), 500, "UNSUPPORTED_OPERATION"),
        (MessagingError(queue="ClubRequest"), 500, "MESSAGING_ERROR"),
    ],
)
def test_status_and_error_codes(error: NCFCAException, status_code: int, error_code: str):
    assert error.status_code == status_code
    assert error.to_dict()["code"] == error_code
    assert error.to_dict()["status_code"] == status_code


def test_redundant_operation_is_an_invalid_operation():
    assert isinstance(RedundantOperationError("already"), InvalidOperationError)


def test_not_found_message_and_details():
    error = EntityNotFoundError("ClubRequest", "req-1")

    assert error.message == "ClubRequest with id req-1 not found"
    assert error.to_dict()["details"] == {"entity": "ClubRequest", "entity_id": "req-1"}
