"""
Handler errors. Each carries the HTTP status it is rendered with; the app
turns every one of them into an `{"error": message}` body.
"""


class HandlerError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(HandlerError):
    """A required field is missing or malformed."""

    status_code = 400


class UnauthorizedError(HandlerError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(HandlerError):
    status_code = 404


class DownstreamError(HandlerError):
    """A required provider or key is unavailable."""

    status_code = 500
