"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidTransitionError(ValidationError):
    """A status change is not allowed from the current state."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class UnknownZoneError(DomainException):
    """A delivery zone id is not in the zone table (strict mode only)."""

    def __init__(self, zone_id: str) -> None:
        super().__init__(f"Unknown delivery zone '{zone_id}'")
        self.zone_id = zone_id


class UnavailableItemError(DomainException):
    """A cart item can no longer be ordered.

    The product (or its farm) was removed, disabled or moved between
    add-to-cart and checkout. The caller must drop the item and re-price.
    """

    def __init__(self, product_id: str, reason: str) -> None:
        super().__init__(f"Product '{product_id}' is unavailable: {reason}")
        self.product_id = product_id
        self.reason = reason


class SkipLimitExceeded(DomainException):
    """The subscription already used every skip allowed this cycle."""

    def __init__(self, cap: int) -> None:
        super().__init__(f"Maximum skips for this cycle reached ({cap})")
        self.cap = cap


class DuplicateOrderNumberError(DomainException):
    """An order with the same order number has already been stored."""

    def __init__(self, order_number: str) -> None:
        super().__init__(f"Order number '{order_number}' is already in use")
        self.order_number = order_number


class PauseLimitExceeded(DomainException):
    """The subscription already used every pause allowed this year."""

    def __init__(self, cap: int) -> None:
        super().__init__(f"Maximum pauses for this year reached ({cap})")
        self.cap = cap
