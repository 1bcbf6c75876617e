"""
Error taxonomy shared by the auth and workflow services.
Each error carries the HTTP status the API layer renders it with.
"""
from __future__ import annotations

from typing import Any, Optional


class WorkflowError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(WorkflowError):
    """Bad or missing input."""

    status_code = 400


class UnauthorizedError(WorkflowError):
    """Missing token or bad credentials."""

    status_code = 401


class ForbiddenError(WorkflowError):
    """Invalid/expired token or insufficient role."""

    status_code = 403


class NotFoundError(WorkflowError):
    status_code = 404

    def __init__(self, resource_type: str, identifier: Any, message: Optional[str] = None):
        super().__init__(
            message or f"{resource_type} with ID {identifier} not found.",
            {"resourceType": resource_type, "identifier": identifier},
        )
        self.resource_type = resource_type
        self.identifier = identifier


class ConflictError(WorkflowError):
    status_code = 409


class InternalError(WorkflowError):
    """Hashing, storage or persistence failure."""

    status_code = 500
