"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
``retryable`` tells the caller whether trying again unchanged can succeed.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    retryable = False


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantityError(ValidationError):
    """A quantity was not a usable integer."""


class InvalidVariantSelectionError(ValidationError):
    """A variant selection does not match the product's option groups."""


class EmptyCartError(DomainException):
    """Checkout was attempted with nothing left in the cart."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class LoadError(DomainException):
    """The backing store could not be reached or read."""

    retryable = True

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Could not load data: {reason}")
