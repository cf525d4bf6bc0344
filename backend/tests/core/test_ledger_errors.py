"""Error Hierarchy — codes, categories, statuses and response envelopes."""

from merchcoin.core.domain_types import FailureKind
from merchcoin.core.errors import (
    AuthenticationError, BusinessRuleViolation, DatabaseError, ErrorCategory,
    ErrorSeverity, InsufficientBalanceError, ItemNotFoundError, LedgerError,
    LedgerInvariantError, RecipientNotFoundError, SelfTransferError,
    StoreTimeoutError,
)


def test_business_rule_violations_carry_their_failure_kind():
    cases = [
        (ItemNotFoundError("umbrella"), FailureKind.ITEM_NOT_FOUND),
        (InsufficientBalanceError(1), FailureKind.INSUFFICIENT_BALANCE),
        (RecipientNotFoundError("ghost"), FailureKind.RECIPIENT_NOT_FOUND),
        (SelfTransferError(1), FailureKind.SELF_TRANSFER),
    ]
    for error, kind in cases:
        assert isinstance(error, BusinessRuleViolation)
        assert error.kind == kind
        assert error.code == kind.name
        assert error.http_status == 400
        assert error.severity == ErrorSeverity.WARNING


def test_not_found_violations_are_resource_category():
    assert ItemNotFoundError("x").category == ErrorCategory.RESOURCE_NOT_FOUND
    assert RecipientNotFoundError("x").category == ErrorCategory.RESOURCE_NOT_FOUND
    assert SelfTransferError(1).category == ErrorCategory.BUSINESS_RULE


def test_context_records_offending_identifiers():
    assert ItemNotFoundError("socks").context.item_name == "socks"
    assert RecipientNotFoundError("bob").context.username == "bob"
    assert InsufficientBalanceError(42).context.account_id == 42


def test_to_response_envelope_shape():
    body = InsufficientBalanceError(1).to_response()
    error = body["error"]
    assert error["code"] == "INSUFFICIENT_BALANCE"
    assert error["message"] == "insufficient balance"
    assert error["category"] == "business_rule"
    assert error["severity"] == "warning"
    assert "timestamp" in error


def test_store_timeout_is_a_transient_database_error():
    error = StoreTimeoutError("pool exhausted", "connect")
    assert isinstance(error, DatabaseError)
    assert error.code == "STORE_TIMEOUT"
    assert error.category == ErrorCategory.TIMEOUT
    assert error.http_status == 503
    assert not isinstance(error, BusinessRuleViolation)


def test_database_error_message_names_operation():
    error = DatabaseError("Connection lost", "execute")
    assert error.message == "Database execute failed: Connection lost"
    assert error.http_status == 503


def test_invariant_error_response_is_opaque():
    error = LedgerInvariantError("debit target account 9 does not exist")
    body = error.to_response()["error"]
    assert error.http_status == 500
    assert body["code"] == "INTERNAL_ERROR"
    assert "account 9" not in body["message"]


def test_authentication_error_is_401():
    error = AuthenticationError("invalid or expired token")
    assert isinstance(error, LedgerError)
    assert error.http_status == 401
    assert error.code == "UNAUTHORIZED"
