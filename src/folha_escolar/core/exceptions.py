from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidPeriod(ValidationError):
    def __init__(self, message: str = "período inválido (use AAAA-MM)"):
        super().__init__(message, field="period")


class MissingMatricula(ValidationError):
    def __init__(self, message: str = "matrícula é obrigatória"):
        super().__init__(message, field="matricula")


class AuthenticationError(DomainError):
    """Raised when the credential or admin password is missing, invalid or expired."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a valid credential lacks the admin role."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ConfigurationError(DomainError):
    """Server-side misconfiguration (admin password or signing secret unset)."""

    status_code = 500


class StorageError(DomainError):
    """Transient storage failure (connection, timeout, constraint race). Safe to retry."""

    status_code = 500
