"""
Error taxonomy shared by the service layer.

Services raise these exceptions; endpoints translate them into HTTP
responses.  Store failures are not wrapped here: ``pymongo`` errors
propagate unchanged and are answered with HTTP 500 by the handler
registered in ``main.create_app``.
"""


class ServiceError(Exception):
    """Base class for errors reported back to the client."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Missing or invalid input, including unresolvable tags."""


class NotFoundError(ServiceError):
    """A document looked up by id or by name does not exist."""


class AuthenticationError(ServiceError):
    """Credentials were supplied but do not match."""


class ForbiddenError(ServiceError):
    """A bearer token is absent, malformed, tampered with or expired."""
