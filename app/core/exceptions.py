"""Custom exceptions for the Jobly API.

Model and dependency code raises these; the handlers registered in
``main.py`` turn them into JSON responses with the matching status code.
"""


class JoblyError(Exception):
    """Base exception for all Jobly errors."""

    status_code: int = 500

    def __init__(self, message, details: dict | None = None):
        """Initialize exception with message and optional details.

        Args:
            message: Human-readable error message (or a list of messages
                for validation failures)
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequestError(JoblyError):
    """Raised for invalid input: empty updates, duplicates, bad filters."""

    status_code = 400


class NotFoundError(JoblyError):
    """Raised when a record looked up by key does not exist."""

    status_code = 404


class UnauthorizedError(JoblyError):
    """Raised when a credential is missing, invalid, or not privileged enough."""

    status_code = 401
