# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., circular dependencies)."""


class ScheduleCycleError(BusinessRuleError):
    """Raised when the dependency graph is not a forest and the cycle policy is strict."""
    def __init__(self, message: str, *, cycle: list[str] | None = None, code: str = "SCHEDULE_CYCLE"):
        super().__init__(message, code=code)
        self.cycle: list[str] = list(cycle or [])
