"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer (or any other boundary) can catch them uniformly and show
user-friendly messages.  Store failures are *not* domain errors; they are
reported as InfrastructureError once the transaction has been rolled back.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    def __init__(self, message: str, entity: str | None = None, entity_id: object = None) -> None:
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id

    @classmethod
    def for_entity(cls, entity: str, entity_id: object) -> EntityNotFoundError:
        return cls(f"{entity} #{entity_id} not found", entity=entity, entity_id=entity_id)


class PolicyViolationError(ValidationError):
    """The minimum order quantity was not met."""

    def __init__(self, required: int, submitted: int) -> None:
        super().__init__(
            f"Minimum order quantity is {required} units in total, "
            f"got {submitted} (short by {required - submitted})"
        )
        self.required = required
        self.submitted = submitted


class InsufficientStockError(ValidationError):
    """A product does not have enough stock for the requested quantity."""

    def __init__(self, product_id: int, product_name: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_name} (#{product_id}): "
            f"requested {requested}, available {available}"
        )
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available

    @property
    def shortfall(self) -> int:
        return self.requested - self.available


class InvalidTransitionError(ValidationError):
    """An order status change is not allowed from the current status."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(f"Cannot move order from {current} to {requested}")
        self.current = current
        self.requested = requested


class AuthorizationError(DomainException):
    """The caller's role does not grant the requested capability."""


class InfrastructureError(Exception):
    """The store failed (connection loss, lock timeout, constraint violation).

    Raised only after the transaction has been rolled back, so the caller
    may safely retry the whole operation.
    """
