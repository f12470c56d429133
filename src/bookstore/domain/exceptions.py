"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Two families matter at the boundary:

- ``EntityNotFoundError`` — the thing asked for does not exist (404-style).
- ``ValidationError`` — bad input or a broken business rule (400-style).
  ``BusinessRuleViolation`` narrows this to rejections caused by the current
  state of the system (stock, quotas, order status) rather than the input.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input is invalid (bad quantity, duplicate e-mail, malformed price...)."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class OrderNotFoundError(EntityNotFoundError):
    pass


class BookNotFoundError(EntityNotFoundError):
    pass


class CustomerNotFoundError(EntityNotFoundError):
    pass


class OfferNotFoundError(EntityNotFoundError):
    pass


class BusinessRuleViolation(ValidationError):
    """The request is well-formed but the current state forbids it."""


class InsufficientStockError(BusinessRuleViolation):
    pass


class QuotaExceededError(BusinessRuleViolation):
    pass


class OfferNotValidError(BusinessRuleViolation):
    pass


class InvalidTransitionError(BusinessRuleViolation):
    pass


class DuplicateOrderNumberError(DomainException):
    """Another order already holds this order number.

    Raised by repositories when the unique constraint fires; the order
    builder regenerates the number and retries.
    """

    def __init__(self, order_number: str) -> None:
        super().__init__(f"Order number '{order_number}' is already in use")
        self.order_number = order_number
