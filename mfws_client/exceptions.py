"""Custom exceptions for the M-Files Web Service client."""


class MFWSError(Exception):
    """Base exception for the M-Files Web Service client."""

    def __init__(self, message: str, status_code: int = None, response: dict = None):
        self.message = message
        self.status_code = status_code
        self.response = response
        super().__init__(self.message)


class InvalidArgumentError(MFWSError, ValueError):
    """Raised when an identifier or argument is malformed or incomplete."""

    pass


class NotSupportedError(MFWSError, NotImplementedError):
    """Raised when a value cannot be encoded (e.g. an unknown operator)."""

    pass


class EncodingInvariantViolation(MFWSError):
    """Raised when an encoded path segment does not decode back to its parts."""

    pass


class AuthenticationError(MFWSError):
    """Raised when the server rejects the request's credentials."""

    pass


class ForbiddenError(MFWSError):
    """Raised when the authenticated user may not perform the operation."""

    pass


class NotFoundError(MFWSError):
    """Raised when a resource is not found."""

    pass
