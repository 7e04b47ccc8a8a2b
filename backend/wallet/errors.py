"""
Wallet Error Hierarchy

Every error raised on the read path derives from WalletError and carries the
HTTP status and the user-facing body it maps to. Messages never include the
reason an authorization check failed.
"""

from typing import Optional

from .config import ERROR_MESSAGES


class WalletError(Exception):
    """Base exception for all wallet errors."""

    error = "Internal Server Error"
    http_status = 500

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {
            "error": self.error,
            "message": self.message
        }


class NotFound(WalletError):
    """Identity or target user does not exist."""

    error = "Not Found"
    http_status = 404

    def __init__(self, message: str = ERROR_MESSAGES["USER_NOT_FOUND"], lookup: Optional[str] = None):
        super().__init__(message)
        self.lookup = lookup


class Unauthorized(WalletError):
    """Caller may not perform this action, or is not authenticated."""

    error = "Unauthorized"
    http_status = 401

    def __init__(self, message: str = ERROR_MESSAGES["UNAUTHORIZED"]):
        super().__init__(message)


class StoreUnavailable(WalletError):
    """Transient persistence failure; callers may retry."""

    error = "Service Unavailable"
    http_status = 503

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        super().__init__(ERROR_MESSAGES["STORE_UNAVAILABLE"], cause=cause)
        self.operation = operation

    def __str__(self):
        return f"{self.operation} failed: {self.cause}"


class AdminOperationFailed(WalletError):
    """
    Failure of an administrative operation.

    Built and logged by the role mutator; never raised to its callers.
    """

    def __init__(self, operation: str, user_id: Optional[str], cause: Optional[BaseException] = None):
        super().__init__(f"{operation} failed for user {user_id}", cause=cause)
        self.operation = operation
        self.user_id = user_id

    def __str__(self):
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"
