"""Base domain exceptions shared by every module.

Services raise subclasses of these; ``modules.core.exception_handler``
maps each family to an HTTP status without knowing the concrete module.
"""

from __future__ import annotations


class DomainError(Exception):
    """Root of all business-rule failures."""


class NotFoundError(DomainError):
    """The requested entity does not exist for the given key."""


class AlreadyExistsError(DomainError):
    """Persisting the entity would violate a uniqueness rule."""
