class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidIntervalError(ValidationError):
    """Raised when a shift ends before it starts.

    Overnight entries must be normalized by the caller (end moved to the next
    day) before pay is computed.
    """


class NotFoundError(DomainError):
    """Raised when a record does not exist or belongs to another user."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a request has no logged-in user."""
