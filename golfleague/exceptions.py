"""Exception types raised by the scoring engine and approval workflow."""

from typing import Any, Optional


class LeagueError(Exception):
    """Base class for league scoring errors."""


class TransitionError(LeagueError):
    """A match action was attempted from a status that does not allow it."""

    def __init__(self, action: str, status: str, reason: Optional[str] = None):
        self.action = action
        self.status = status
        self.reason = reason or f'{action} is not actionable in current state {status!r}'
        super().__init__(self.reason)


class PermissionDenied(LeagueError):
    """The acting user may not perform this action on the match."""

    def __init__(self, action: str, reason: str):
        self.action = action
        self.reason = reason
        super().__init__(f'{action} denied: {reason}')


class PersistenceError(LeagueError):
    """
    A write to the document store failed.

    Carries the operation, document key and payload so a caller can retry
    the same idempotent merge.
    """

    retryable = True

    def __init__(self, operation: str, collection: str, key: str, payload: Any = None):
        self.operation = operation
        self.collection = collection
        self.key = key
        self.payload = payload
        super().__init__(f'{operation} failed for {collection}/{key}')


class StaleDocument(LeagueError):
    """A compare-and-set found a different value than the caller expected."""

    def __init__(self, collection: str, key: str, field: str, expected: tuple, actual: Any):
        self.collection = collection
        self.key = key
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'{collection}/{key}: expected {field} in {expected}, found {actual!r}'
        )


class InvalidSubmission(LeagueError):
    """Submitted scores failed validation; ``errors`` lists the reasons."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__('; '.join(errors))
