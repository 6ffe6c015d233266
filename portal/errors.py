"""
Domain error taxonomy.

Every failure the service reports to a caller is one of these classes. Each
carries an explicit `ErrorKind`, a short machine-readable `code`, a human
message and the HTTP status it maps to, so handlers never inspect message text.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation_error"
    AUTH = "auth_error"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    UPLOAD = "upload_error"
    INTERNAL = "internal_error"


class PortalError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL
    default_code: str = "INTERNAL_ERROR"
    default_status: int = 500

    def __init__(self, message: str, *, code: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.status_code = status_code or self.default_status

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error": self.kind.value,
            "code": self.code,
            "message": self.message,
        }


class ValidationError(PortalError):
    kind = ErrorKind.VALIDATION
    default_code = "INVALID_INPUT"
    default_status = 400


class AuthError(PortalError):
    kind = ErrorKind.AUTH
    default_code = "UNAUTHORIZED"
    default_status = 401


class ConflictError(PortalError):
    kind = ErrorKind.CONFLICT
    default_code = "CONFLICT"
    default_status = 409


class RoleConflictError(ConflictError):
    default_code = "ROLE_CONFLICT"
    default_status = 400

    def __init__(self, role: str):
        super().__init__(f"A team member with role {role} already exists")
        self.role = role


class NotFoundError(PortalError):
    kind = ErrorKind.NOT_FOUND
    default_code = "NOT_FOUND"
    default_status = 404


class UploadError(PortalError):
    kind = ErrorKind.UPLOAD
    default_code = "UPLOAD_REJECTED"
    default_status = 400


def invalid_choice(field_name: str, choices) -> ValidationError:
    """Build the error raised for a value outside an enumerated set."""
    allowed = " or ".join(", ".join(choices).rsplit(", ", 1))
    return ValidationError(f"{field_name} must be {allowed}", code=f"INVALID_{field_name.upper()}")
