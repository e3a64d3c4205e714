"""
Application exceptions and their HTTP status codes.

Services and dependencies raise these; the handlers registered in main.py
turn them into `{"error": message}` responses.
"""


class TestDeskError(Exception):
    """Base class for errors that map to a client-visible HTTP response."""
    __test__ = False  # keep pytest from collecting this as a test class

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(TestDeskError):
    status_code = 401
    default_message = "Authentication required"


class InvalidToken(TestDeskError):
    status_code = 403
    default_message = "Invalid or expired token"


class Forbidden(TestDeskError):
    status_code = 403
    default_message = "Not allowed"


class NotFound(TestDeskError):
    status_code = 404
    default_message = "Not found"


class ValidationFailure(TestDeskError):
    status_code = 400
    default_message = "Invalid request"


class UserNotFound(ValidationFailure):
    default_message = "User not found"


class InvalidPassword(ValidationFailure):
    default_message = "Invalid password"


class DuplicateEmail(ValidationFailure):
    default_message = "Email already registered"


class InternalFailure(TestDeskError):
    status_code = 500
    default_message = "Internal server error"
