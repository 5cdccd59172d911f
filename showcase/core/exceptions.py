"""Exceptions raised by the resource registries and collaborators."""


class ShowcaseError(Exception):
    """Base exception for request-level failures reported to the caller."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(ShowcaseError):
    """Raised when a required field is missing or malformed."""

    status_code = 400


class NotFoundError(ShowcaseError):
    """Raised when a project (or a batch of projects) does not exist."""

    status_code = 404


class MediaHostError(ShowcaseError):
    """Raised when the media host rejects a request or cannot be reached.

    Reported to the caller as a generic internal error; the message is only logged.
    """

    status_code = 500
