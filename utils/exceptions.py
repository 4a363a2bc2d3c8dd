"""Application error taxonomy; each error knows the HTTP status it maps to."""


class ClaimsAPIError(Exception):
    """Base exception for all application errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ClaimsAPIError):
    """Missing or malformed fields, bad dates, limits exceeded, illegal transitions."""

    status_code = 400


class UnauthorizedError(ClaimsAPIError):
    """Missing, invalid or expired token, or bad credentials."""

    status_code = 401


class TokenExpiredError(UnauthorizedError):
    pass


class ForbiddenError(ClaimsAPIError):
    """Authenticated, but not the owner or lacking the required role."""

    status_code = 403


class NotFoundError(ClaimsAPIError):
    status_code = 404


class ConflictError(ClaimsAPIError):
    """Duplicate contact/email, duplicate claim, or a contradicting decision."""

    status_code = 409
