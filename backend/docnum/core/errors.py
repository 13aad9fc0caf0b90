from __future__ import annotations

from fastapi import status


class NumberingError(Exception):
    """Base class for failures reported to the caller as ``{"error": message}``."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(NumberingError):
    status_code = status.HTTP_400_BAD_REQUEST


class MasterDataNotFound(NumberingError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} not found: {name}")
        self.kind = kind
        self.name = name


class MasterDataAmbiguous(NumberingError):
    """More than one master record carries the requested display name."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} is not unique: {name}")
        self.kind = kind
        self.name = name


class AllocationConflict(NumberingError):
    """Concurrent allocations for one scope kept colliding; nothing was issued."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Number allocation conflicted after {attempts} attempts, please retry")
        self.attempts = attempts


class PersistenceError(NumberingError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class AllocationTimeout(NumberingError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT
