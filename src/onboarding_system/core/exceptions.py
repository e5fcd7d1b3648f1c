class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidArgument(ValidationError):
    """Raised when a call receives an argument outside its accepted domain."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""
