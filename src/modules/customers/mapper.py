"""Translation between the wire DTOs and the ``Customer`` entity.

Pure functions: no I/O, no validation.  ``None`` in gives ``None`` out.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from modules.customers.dtos import CustomerRequestDTO, CustomerResponseDTO
from modules.customers.models import Customer


def request_to_entity(dto: Optional[CustomerRequestDTO]) -> Optional[Customer]:
    """Build an unsaved ``Customer``.

    Only name/email/phone are copied; ``id``, ``registered_at`` and
    ``active`` are left for the storage layer and the entity to assign.
    """
    if dto is None:
        return None
    return Customer(name=dto.name, email=dto.email, phone=dto.phone)


def entity_to_response(customer: Optional[Customer]) -> Optional[CustomerResponseDTO]:
    if customer is None:
        return None
    return CustomerResponseDTO(
        id=customer.id,
        name=customer.name,
        email=customer.email,
        phone=customer.phone,
        registered_at=customer.registered_at,
        active=customer.active,
    )


def list_to_responses(
    customers: Optional[Iterable[Customer]],
) -> Optional[List[CustomerResponseDTO]]:
    if customers is None:
        return None
    return [entity_to_response(customer) for customer in customers]
