"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
``modules.core.exception_handler`` translates them into HTTP responses
through their base classes (404 / 409).
"""

from __future__ import annotations

from modules.core.exceptions import AlreadyExistsError, NotFoundError


class CustomerAlreadyExists(AlreadyExistsError):
    """A customer with the same name or email already exists.

    Uniqueness spans active and soft-deleted customers alike.
    """


class CustomerNotFound(NotFoundError):
    """No customer matches the given id or name."""

    @classmethod
    def by_id(cls, id: int) -> CustomerNotFound:
        return cls(f"Cliente no encontrado con id: {id}")

    @classmethod
    def by_field(cls, field: str, value: str) -> CustomerNotFound:
        return cls(f"Cliente no encontrado con {field}: {value}")
