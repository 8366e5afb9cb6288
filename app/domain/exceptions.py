from __future__ import annotations

from collections.abc import Iterable


class DomainError(Exception):
    """Base class for errors the API maps onto a failure envelope."""

    message_key: str = "error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.message_key)
        self.detail = detail


class NotFoundError(DomainError):
    """The id does not exist within the caller's own records.

    Records of other owners are reported the same way so their existence is not leaked.
    """

    message_key = "patient_not_found"


class InvalidFieldSelectionError(DomainError):
    """`fields` named a column outside the recognized field set."""

    message_key = "invalid_fields"

    def __init__(self, invalid: Iterable[str]):
        self.invalid = sorted(set(invalid))
        super().__init__(", ".join(self.invalid))


class AuthenticationError(DomainError):
    """Missing, malformed or expired bearer token, or an unknown/inactive owner."""

    message_key = "unauthenticated"
