"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Business rules enforced here:
- Names are unique across all customers, active or soft-deleted.
- Emails are unique across all customers.
- ``delete_customer`` only deactivates; ``hard_delete_customer`` removes.
- Updates touch name/email/phone only; ``id``, ``registered_at`` and
  ``active`` are never rewritten by an update.

Uniqueness is checked before writing, and the database unique indexes
back the check up: a write that loses a race raises ``IntegrityError``
inside a savepoint, which is reported as ``CustomerAlreadyExists``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import DatabaseError, IntegrityError, transaction

from modules.customers.exceptions import CustomerAlreadyExists, CustomerNotFound
from modules.customers.mapper import request_to_entity

if TYPE_CHECKING:
    from modules.customers.dtos import CustomerRequestDTO
    from modules.customers.models import Customer
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


def _duplicate_name(name: str) -> CustomerAlreadyExists:
    return CustomerAlreadyExists(f"Ya existe un cliente con el nombre: {name}")


def _duplicate_email(email: str) -> CustomerAlreadyExists:
    return CustomerAlreadyExists(f"Ya existe un cliente con el email: {email}")


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    Holds no state besides the repository, so one instance per request
    is cheap and safe.
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CustomerRequestDTO) -> Customer:
        """Create a new active customer.

        Raises:
            CustomerAlreadyExists: if the name or the email is taken.
        """
        log = logger.bind(customer_name=dto.name)

        if self._repo.exists_by_name(dto.name):
            log.warning("customer.duplicate_name")
            raise _duplicate_name(dto.name)

        if dto.email and self._repo.get_by_email(dto.email):
            log.warning("customer.duplicate_email", email=dto.email)
            raise _duplicate_email(dto.email)

        customer = self._persist(request_to_entity(dto))
        log.info("customer.created", customer_id=customer.id)
        return customer

    @transaction.atomic
    def update_customer(self, id: int, dto: CustomerRequestDTO) -> Customer:
        """Overwrite name, email and phone of an existing customer.

        Keeping the current name (or email) never counts as a collision.

        Raises:
            CustomerNotFound: if the customer does not exist.
            CustomerAlreadyExists: if the new name or email belongs to
                another customer.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound.by_id(id)

        log = logger.bind(customer_id=id)

        if dto.name != customer.name and self._repo.exists_by_name(dto.name):
            log.warning("customer.duplicate_name", customer_name=dto.name)
            raise _duplicate_name(dto.name)

        if dto.email and dto.email != customer.email:
            if self._repo.get_by_email(dto.email):
                log.warning("customer.duplicate_email", email=dto.email)
                raise _duplicate_email(dto.email)

        customer.name = dto.name
        customer.email = dto.email
        customer.phone = dto.phone

        customer = self._persist(customer)
        log.info("customer.updated")
        return customer

    @transaction.atomic
    def delete_customer(self, id: int) -> None:
        """Soft-delete a customer (``active=False``).  Idempotent.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound.by_id(id)
        customer.deactivate()
        self._persist(customer)
        logger.info("customer.soft_deleted", customer_id=id)

    @transaction.atomic
    def hard_delete_customer(self, id: int) -> None:
        """Remove a customer permanently.  Irreversible.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        if not self._repo.exists(id):
            raise CustomerNotFound.by_id(id)
        self._repo.delete(id)
        logger.info("customer.hard_deleted", customer_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(self) -> List[Customer]:
        """Return the active customers only."""
        return self._repo.list_by_active(True)

    def get_customer(self, id: int) -> Customer:
        """Retrieve a customer by ID, active or not.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound.by_id(id)
        logger.info("customer.retrieved", customer_id=id)
        return customer

    def get_customer_by_name(self, name: str) -> Customer:
        """Retrieve a customer by exact name, active or not.

        Raises:
            CustomerNotFound: if no customer has that name.
        """
        customer = self._repo.get_by_name(name)
        if not customer:
            raise CustomerNotFound.by_field("nombre", name)
        logger.info("customer.retrieved", customer_id=customer.id)
        return customer

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _persist(self, customer: Customer) -> Customer:
        """Save inside a savepoint.

        Unique violations become ``CustomerAlreadyExists``.  An UPDATE that
        matches no row means the customer was hard-deleted after it was
        loaded, which is reported as ``CustomerNotFound``.
        """
        try:
            with transaction.atomic():
                return self._repo.save(customer)
        except IntegrityError as exc:
            holder = self._repo.get_by_name(customer.name)
            logger.warning(
                "customer.unique_violation",
                customer_id=customer.id,
                error=str(exc),
            )
            if holder is not None and holder.id != customer.id:
                raise _duplicate_name(customer.name) from exc
            raise _duplicate_email(customer.email) from exc
        except DatabaseError as exc:
            if customer.id is None or self._repo.exists(customer.id):
                raise
            logger.warning("customer.vanished_during_update", customer_id=customer.id)
            raise CustomerNotFound.by_id(customer.id) from exc
