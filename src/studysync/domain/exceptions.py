"""Domain exceptions for StudySync.

The registries raise these; the API layer maps each kind to an HTTP
status code in one place (see ``infrastructure.api.app``).
"""


class StudySyncError(Exception):
    """Base class for all domain errors."""

    error = "Error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(StudySyncError):
    """Raised for missing or malformed fields and ids."""

    error = "Validation error"


class AlreadyMemberError(ValidationError):
    """Raised when a user tries to join a group they already belong to."""

    def __init__(self, message: str = "You are already a member of this group.") -> None:
        super().__init__(message)


class UnauthorizedError(StudySyncError):
    """Raised when a request carries no valid credentials."""

    error = "Unauthorized"


class InvalidCredentialsError(UnauthorizedError):
    """Raised by login for an unknown email or a wrong password alike."""

    def __init__(self, message: str = "Invalid email or password.") -> None:
        super().__init__(message)


class ForbiddenError(StudySyncError):
    """Raised when an authenticated user may not perform an action."""

    error = "Forbidden"


class NotFoundError(StudySyncError):
    """Raised when a requested record does not exist."""

    error = "Not found"


class ConflictError(StudySyncError):
    """Raised on a uniqueness violation."""

    error = "Conflict"

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)
