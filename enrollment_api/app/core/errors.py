"""
Application error types.

Services raise these instead of ``HTTPException`` so they stay usable
outside a request.  ``main.create_app`` registers handlers that turn
them into JSON responses with the matching HTTP status.
"""

from typing import List, Optional


class ApplicationError(Exception):
    """Base class for errors the API knows how to report."""

    name = "ApplicationError"
    default_message = "Application error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Nothing matched the lookup (missing enrollment or unknown CEP)."""

    name = "NotFoundError"
    default_message = "No result for this search!"


class PostalCodeLookupError(NotFoundError):
    """The postal code service could not be reached or answered garbage.

    Subclasses ``NotFoundError`` so callers that only care about
    "no address for this CEP" keep treating it that way.
    """

    name = "PostalCodeLookupError"


class InvalidDataError(ApplicationError):
    """Submitted data failed a business validation."""

    name = "InvalidDataError"
    default_message = "Invalid data"

    def __init__(self, details: List[str], message: Optional[str] = None) -> None:
        self.details = list(details)
        super().__init__(message)


class UnauthorizedError(ApplicationError):
    name = "UnauthorizedError"
    default_message = "You must be signed in to continue"


def not_found_error() -> NotFoundError:
    return NotFoundError()


def invalid_data_error(details: List[str]) -> InvalidDataError:
    return InvalidDataError(details)
