from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class TransportError(DomainError):
    """Raised when the backend could not be reached at all."""


class HttpError(DomainError):
    """Raised for non-2xx responses (or a 2xx body that is not JSON).

    `payload` keeps the decoded error body so callers can inspect
    backend-specific fields such as `code`.
    """

    def __init__(self, message: str, *, status: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.status = status
        self.payload = payload

    @property
    def code(self) -> Optional[str]:
        if isinstance(self.payload, dict) and isinstance(self.payload.get("code"), str):
            return self.payload["code"]
        return None


class RegistrationError(DomainError):
    """Raised when a sign-up cannot be completed; carries per-field messages."""

    def __init__(self, message: str, *, field_errors: Optional[dict[str, str]] = None):
        super().__init__(message)
        self.field_errors = dict(field_errors or {})
