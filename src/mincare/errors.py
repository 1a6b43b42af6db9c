"""Exception hierarchy for MinCare.

Every error carries a machine-readable ``code`` so API clients can branch
on it without parsing English messages.
"""

from __future__ import annotations

from typing import Any


class MincareError(Exception):
    """Base class for all application-level errors."""

    http_status: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidObservationError(MincareError):
    """A raw observation has an impossible shape (e.g. sleep ends before it starts)."""

    http_status = 422
    code = "INVALID_OBSERVATION"


class StorageUnavailableError(MincareError):
    """The storage collaborator could not complete an operation."""

    http_status = 503
    code = "STORAGE_UNAVAILABLE"

    def __init__(self, operation: str) -> None:
        super().__init__(
            message=f"Storage is unavailable ({operation}).",
            details={"operation": operation},
        )


class NotFoundError(MincareError):
    http_status = 404
    code = "NOT_FOUND"

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(
            message=f"{kind} {identifier} not found.",
            details={"kind": kind, "id": identifier},
        )


class MembershipRequiredError(MincareError):
    http_status = 403
    code = "MEMBERSHIP_REQUIRED"

    def __init__(self, group_id: str) -> None:
        super().__init__(
            message="Join the group before posting.",
            details={"group_id": group_id},
        )


class AlreadyMemberError(MincareError):
    http_status = 409
    code = "ALREADY_MEMBER"

    def __init__(self, group_id: str) -> None:
        super().__init__(
            message="Already a member of this group.",
            details={"group_id": group_id},
        )
