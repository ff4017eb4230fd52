class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or out of range."""


class NotFoundError(DomainError):
    """Raised when a referenced learner or record does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class StoreError(Exception):
    """Raised when the underlying data store fails.

    The original driver error is chained as ``__cause__`` and is only ever
    logged server-side.
    """
