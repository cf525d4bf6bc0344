"""Workflow Outcomes — closed result variants returned by every ledger workflow.

Invariants:
    - A workflow returns exactly one of Success(value) or Failure(kind, message)
    - Failure.kind is always a FailureKind member (closed set, no free-form strings)
    - Transient and invariant errors are NOT outcomes — they propagate as exceptions

Design Decisions:
    - Frozen dataclasses over exceptions at the boundary: the API maps each kind to a
      status through a table instead of matching on messages
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from merchcoin.core.domain_types import FailureKind

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Scope committed; value is the workflow payload."""
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Scope aborted by a business rule; nothing was made visible."""
    kind: FailureKind
    message: str

    @property
    def ok(self) -> bool:
        return False


Outcome = Success[T] | Failure
