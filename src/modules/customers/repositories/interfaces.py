"""Customer repository interface.

Extends ``IRepository[Customer]`` with the look-ups the service needs
to enforce name/email uniqueness and to list active customers.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Customer]:
        """Retrieve a customer by exact name."""

    @abstractmethod
    def exists_by_name(self, name: str) -> bool:
        """Return ``True`` if any customer (active or not) has this name."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Customer]:
        """Retrieve a customer by exact email address."""

    @abstractmethod
    def list_by_active(self, active: bool) -> List[Customer]:
        """List customers whose ``active`` flag equals ``active``."""
