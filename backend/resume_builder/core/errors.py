"""
Error taxonomy shared by the domain, storage and HTTP layers.

Every error carries an HTTP status and a machine-readable code; the Flask error
handlers in ``resume_builder.main`` and the blueprints turn them into JSON.
"""
from __future__ import annotations


class AppError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(AppError):
    status_code = 401
    code = "AUTHENTICATION_ERROR"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(AppError):
    # duplicate signup email is reported as a plain bad request
    status_code = 400
    code = "CONFLICT"


class InternalError(AppError):
    status_code = 500
    code = "INTERNAL_ERROR"


class ItemNotFoundError(NotFoundError):
    """A child item (education, experience, skill) id is not in its collection."""

    code = "ITEM_NOT_FOUND"

    def __init__(self, kind: str, item_id: int) -> None:
        super().__init__(f"{kind} with ID {item_id} not found")
        self.kind = kind
        self.item_id = item_id


class ResumeNotFoundError(NotFoundError):
    code = "RESUME_NOT_FOUND"

    def __init__(self, resume_id: int | None) -> None:
        super().__init__(f"Resume with ID {resume_id} not found")
        self.resume_id = resume_id


class StaleResumeError(ConflictError):
    """The stored résumé changed since the aggregate was loaded."""

    status_code = 409
    code = "RESUME_VERSION_CONFLICT"

    def __init__(self, resume_id: int, expected_version: int | None) -> None:
        super().__init__(
            f"Resume {resume_id} was modified concurrently (expected version {expected_version})"
        )
        self.resume_id = resume_id
        self.expected_version = expected_version
