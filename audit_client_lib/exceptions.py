"""
Custom exception hierarchy for the audit client library.

All public exceptions inherit from :class:`AuditClientError`, allowing callers
to catch a single base class for any audit‑client failure while still being
able to differentiate specific error conditions when needed.  Each exception
carries the name of the logical operation it was raised for, so a failure can
be diagnosed without looking at the audit service logs.
"""

from typing import Optional


class AuditClientError(Exception):
    """Base exception for all audit‑client‑specific errors."""

    def __init__(self, message: str, operation: Optional[str] = None) -> None:
        super().__init__(message)
        self.operation = operation


class InvalidRequest(AuditClientError, ValueError):
    """
    Raised before dispatch when a field required by the targeted operation
    is missing from the request.
    """

    def __init__(
        self,
        field: str,
        operation: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        super().__init__(message or f"{field} cannot be null", operation=operation)
        self.field = field


class RegistryLookupError(AuditClientError):
    """Raised by a single, failed lookup against the service registry."""

    pass


class ServiceUnavailable(AuditClientError):
    """Raised when the audit service could not be located after all retries."""

    def __init__(self, service_id: str, attempts: int) -> None:
        super().__init__(
            f"Unable to locate service '{service_id}' after {attempts} attempt(s)"
        )
        self.service_id = service_id
        self.attempts = attempts


class RemoteOperationFailed(AuditClientError):
    """Raised when the audit service answers with a non‑success HTTP status."""

    def __init__(self, operation: str, status_code: int, reason: str = "") -> None:
        super().__init__(
            f"{operation} request failed. Http Status: ({status_code}, {reason})",
            operation=operation,
        )
        self.status_code = status_code
        self.reason = reason


class TransportError(AuditClientError):
    """Raised on network‑level failures and undecodable response bodies."""

    pass


class AuditClientDisabledError(AuditClientError):
    """Raised when a client is requested while the audit client is disabled."""

    pass
