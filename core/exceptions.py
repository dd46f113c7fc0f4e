# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str,*, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when input data is invalid (horizon, dates, hours)."""


class NotFoundError(DomainError):
    """Raised when a referenced entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when collaborator data violates an engine rule."""


class AdvisoryUnavailableError(DomainError):
    """Raised by advice providers when suggestions cannot be produced."""
