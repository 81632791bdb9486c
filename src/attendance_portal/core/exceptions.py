class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class InvalidPartitionKey(ValidationError):
    """Raised when the professor or semester needed to name a partition is missing."""


class RecordNotFound(DomainError):
    """Raised when a mutation targets a roll number that has no record."""


class MalformedBatch(ValidationError):
    """Raised when batch roll numbers and statuses cannot be paired up."""


class DuplicateCredential(ValidationError):
    """Raised when a registration email or roll number is already taken."""
