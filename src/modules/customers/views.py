"""Customer API views.

Exposes the ``CustomerService`` via HTTP using a DRF ViewSet mounted at
``/api/v1/clientes``.  The view only parses input and renders output:
domain exceptions and DTO validation errors propagate to
``modules.core.exception_handler``, which owns the status-code mapping.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.renderers import JSONRenderer
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.renderers import PlainTextRenderer
from modules.customers.constants import HEALTH_STATUS
from modules.customers.dtos import CustomerRequestDTO
from modules.customers.mapper import entity_to_response, list_to_responses
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CustomerSerializer
from modules.customers.services import CustomerService

logger = structlog.get_logger(__name__)


def _parse_id(pk: str | None) -> int:
    """Path ids must be integers; anything else is a 400, not a 404."""
    try:
        return int(pk)
    except (TypeError, ValueError):
        raise ValueError(f"El id debe ser un número entero: {pk}") from None


def _parse_request(data: object) -> CustomerRequestDTO:
    if not isinstance(data, Mapping):
        raise ValueError("El cuerpo de la petición debe ser un objeto JSON")
    return CustomerRequestDTO.model_validate(data)


class CustomerViewSet(ViewSet):
    """ViewSet for Customer CRUD operations.

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    Listing is not paginated and only returns active customers.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(responses={200: CustomerSerializer})
    def list(self, request: Request) -> Response:
        """GET /api/v1/clientes"""
        logger.info("customer.list_requested")
        customers = self._service.list_customers()
        return Response(CustomerSerializer(list_to_responses(customers), many=True).data)

    @extend_schema(responses={200: CustomerSerializer})
    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/clientes/{pk}"""
        customer = self._service.get_customer(_parse_id(pk))
        return Response(CustomerSerializer(entity_to_response(customer)).data)

    @extend_schema(
        parameters=[OpenApiParameter("nombre", str, required=True)],
        responses={200: CustomerSerializer},
    )
    @action(detail=False, methods=["get"], url_path="buscar")
    def search(self, request: Request) -> Response:
        """GET /api/v1/clientes/buscar?nombre="""
        name = request.query_params.get("nombre")
        if name is None:
            raise ValueError("El parámetro 'nombre' es obligatorio")
        customer = self._service.get_customer_by_name(name)
        return Response(CustomerSerializer(entity_to_response(customer)).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @extend_schema(request=CustomerRequestDTO, responses={201: CustomerSerializer})
    def create(self, request: Request) -> Response:
        """POST /api/v1/clientes"""
        dto = _parse_request(request.data)
        customer = self._service.create_customer(dto)
        return Response(
            CustomerSerializer(entity_to_response(customer)).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=CustomerRequestDTO, responses={200: CustomerSerializer})
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/clientes/{pk}"""
        id = _parse_id(pk)
        dto = _parse_request(request.data)
        customer = self._service.update_customer(id, dto)
        return Response(CustomerSerializer(entity_to_response(customer)).data)

    @extend_schema(responses={204: None})
    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/clientes/{pk} (soft delete)"""
        self._service.delete_customer(_parse_id(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={204: None})
    @action(detail=True, methods=["delete"], url_path="permanente")
    def hard_delete(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/clientes/{pk}/permanente"""
        self._service.hard_delete_customer(_parse_id(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    @extend_schema(responses={200: str})
    @action(
        detail=False,
        methods=["get"],
        url_path="health",
        renderer_classes=[PlainTextRenderer, JSONRenderer],
    )
    def health(self, request: Request) -> Response:
        """GET /api/v1/clientes/health"""
        return Response(HEALTH_STATUS)
