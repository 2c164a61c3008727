class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class RecordNotFoundError(DomainError):
    """Raised when a punch does not exist for the requesting user."""


class NotLatestRecordError(DomainError):
    """Raised when deleting a punch that is not the user's most recent one."""


class DeletionWindowExpiredError(DomainError):
    """Raised when the deletion window of a punch has already passed."""
