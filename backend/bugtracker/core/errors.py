# backend/bugtracker/core/errors.py

from fastapi import status


class TrackerError(Exception):
    """Base class for every failure the Directory and Tracker report."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidCredentials(TrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: str = "Invalid username or password"):
        super().__init__(detail)


class AuthorizationError(TrackerError):
    """The acting account does not hold a role the operation requires."""

    status_code = status.HTTP_403_FORBIDDEN


class RegistrationError(TrackerError):
    pass


class UsernameTaken(RegistrationError):
    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username


class EmptyField(RegistrationError):
    def __init__(self, field: str):
        super().__init__(f"{field} must not be empty")
        self.field = field


class SelfDeleteError(TrackerError):
    def __init__(self, detail: str = "Cannot delete yourself"):
        super().__init__(detail)


class NotFoundError(TrackerError):
    status_code = status.HTTP_404_NOT_FOUND


class ValidationError(TrackerError):
    pass


class EmptyTitle(ValidationError):
    def __init__(self, detail: str = "Title required"):
        super().__init__(detail)


class PersistenceError(TrackerError):
    """A snapshot could not be written; the in-memory change was rolled back."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
