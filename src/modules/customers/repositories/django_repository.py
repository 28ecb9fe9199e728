"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Look-ups follow the Null Object pattern: they return ``None`` (or
``False``) instead of raising, and the Service Layer decides how a
missing customer is reported.
"""

from __future__ import annotations

from typing import List, Optional

import structlog

from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Customer]:
        return Customer.objects.filter(id=id).first()

    def exists(self, id: int) -> bool:
        return Customer.objects.filter(id=id).exists()

    def get_by_name(self, name: str) -> Optional[Customer]:
        return Customer.objects.filter(name=name).first()

    def exists_by_name(self, name: str) -> bool:
        return Customer.objects.filter(name=name).exists()

    def get_by_email(self, email: str) -> Optional[Customer]:
        return Customer.objects.filter(email=email).first()

    def list_by_active(self, active: bool) -> List[Customer]:
        """Customers with the given ``active`` flag, in insertion order."""
        return list(Customer.objects.filter(active=active).order_by("id"))

    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer.

        Unique-constraint violations surface as ``IntegrityError``; the
        caller is expected to wrap this call in a savepoint.
        """
        is_new = entity._state.adding
        entity.save()
        logger.info("customer.saved", customer_id=entity.id, is_new=is_new)
        return entity

    def delete(self, id: int) -> bool:
        """Permanently delete a customer by ID.

        Returns ``True`` if a row was removed, ``False`` otherwise.
        """
        deleted, _ = Customer.objects.filter(id=id).delete()
        if deleted:
            logger.info("customer.hard_deleted", customer_id=id)
        return bool(deleted)
