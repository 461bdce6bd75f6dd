"""
Domain exceptions for the inventory service.

Services raise these when a business rule or ownership check fails. Each class
carries the HTTP status it maps to; the API layer renders them with a single
exception handler, so controllers never build error responses by hand.
"""


class AppError(Exception):
    """Base exception for all inventory domain errors"""

    status_code = 400
    default_detail = "Request could not be processed"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(AppError):
    """Raised when a field is missing, malformed or references something invalid"""

    default_detail = "Invalid request"


class LocationCycleError(ValidationError):
    """Raised when a parent change would make a location its own ancestor"""

    default_detail = "Location cannot be placed under itself or one of its descendants"


class Unauthenticated(AppError):
    """Raised when the identity token is missing, malformed or expired"""

    status_code = 401
    default_detail = "Not authenticated"


class NotFound(AppError):
    """Raised when an entity does not exist or is not owned by the caller"""

    status_code = 404
    default_detail = "Not found"


class ItemNotFound(NotFound):
    default_detail = "Item not found"


class LocationNotFound(NotFound):
    default_detail = "Location not found"


class Conflict(AppError):
    """Raised when a write collides with existing state"""

    status_code = 409
    default_detail = "Conflict"


class DuplicateUsername(Conflict):
    status_code = 400
    default_detail = "Username already exists."


class DuplicateEmail(Conflict):
    status_code = 400
    default_detail = "Email already exists."


class DuplicateAssignment(Conflict):
    default_detail = "This item is already assigned to this location."


class HasChildren(Conflict):
    default_detail = "Cannot delete location with child locations."


class ConcurrentModification(AppError):
    """Raised when a write targets a record modified since it was read; caller retries"""

    status_code = 409
    default_detail = "Record was modified by another request; reload and retry"


class AuthenticationFailed(AppError):
    """Login failures. Reported as 400 like other auth form errors."""

    default_detail = "Authentication failed"


class UserNotFound(AuthenticationFailed):
    default_detail = "User not found."


class InvalidCredentials(AuthenticationFailed):
    default_detail = "Wrong password."
