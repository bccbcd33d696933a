"""Translation of core errors into boundary responses.

A web boundary maps every exception raised by a handler through
``http_status_for`` and ``error_payload``; the CLI only needs the message.
"""

from __future__ import annotations

from winstore.domain.exceptions import (
    AuthorizationError,
    EntityNotFoundError,
    InfrastructureError,
    InsufficientStockError,
    PolicyViolationError,
    ValidationError,
)


def http_status_for(exc: Exception, lookup: bool = False) -> int:
    """Status code for ``exc``.

    ``lookup`` marks requests whose subject is the missing entity itself
    (``GET /orders/7``, ``PATCH /admin/orders/7/status``): those answer 404.
    A product missing from a checkout body is a bad request instead.
    """
    if isinstance(exc, EntityNotFoundError):
        return 404 if lookup else 400
    if isinstance(exc, AuthorizationError):
        return 403
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, InfrastructureError):
        return 503
    return 500


def error_payload(exc: Exception) -> dict:
    if http_status_for(exc) == 500:
        return {"message": "Internal server error", "field": None}
    field = "items" if isinstance(exc, (PolicyViolationError, InsufficientStockError)) else None
    return {"message": str(exc), "field": field}
