"""Integration tests for Customer API endpoints.

Covers:
- CRUD operations via /api/v1/clientes.
- Name search, soft delete visibility, hard delete.
- Domain exception mapping (400, 404, 409).
"""

from __future__ import annotations

import pytest
from freezegun import freeze_time

from modules.customers.models import Customer

pytestmark = pytest.mark.integration

BASE_URL = "/api/v1/clientes"

MARIA = {
    "nombre": "Maria Lopez",
    "email": "maria.lopez@example.com",
    "telefono": "0987654321",
}


def _create(client, payload=None):
    return client.post(BASE_URL, payload or MARIA, format="json")


# ===========================================================================
# CREATE
# ===========================================================================


class TestCustomerCreate:
    def test_create_success(self, api_client):
        response = _create(api_client)

        assert response.status_code == 201
        data = response.json()
        assert data["nombre"] == "Maria Lopez"
        assert data["email"] == "maria.lopez@example.com"
        assert data["telefono"] == "0987654321"
        assert data["activo"] is True
        assert isinstance(data["id"], int)
        assert data["fechaRegistro"]

    @freeze_time("2025-06-15 12:00:00")
    def test_create_stamps_registration_time(self, api_client):
        data = _create(api_client).json()
        assert data["fechaRegistro"].startswith("2025-06-15T12:00:00")

    def test_create_ignores_client_supplied_system_fields(self, api_client):
        payload = {**MARIA, "id": 500, "activo": False, "fechaRegistro": "2000-01-01T00:00:00Z"}
        data = _create(api_client, payload).json()

        customer = Customer.objects.get(id=data["id"])
        assert data["id"] != 500
        assert customer.active is True
        assert customer.registered_at.year != 2000

    def test_create_without_phone(self, api_client):
        payload = {"nombre": "Ana Ruiz", "email": "ana@example.com"}
        response = _create(api_client, payload)
        assert response.status_code == 201
        assert response.json()["telefono"] is None

    def test_create_duplicate_name_returns_409(self, api_client):
        _create(api_client)
        response = _create(api_client, {**MARIA, "email": "otra@example.com"})

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "Conflict"
        assert body["message"] == "Ya existe un cliente con el nombre: Maria Lopez"
        assert Customer.objects.count() == 1

    def test_create_duplicate_of_inactive_name_returns_409(self, api_client, make_customer):
        make_customer(active=False)
        response = _create(api_client, {**MARIA, "email": "otra@example.com"})
        assert response.status_code == 409

    def test_create_duplicate_email_returns_409(self, api_client):
        _create(api_client)
        response = _create(api_client, {**MARIA, "nombre": "Ana Ruiz"})
        assert response.status_code == 409
        assert "email" in response.json()["message"]

    def test_create_missing_fields_returns_400(self, api_client):
        response = _create(api_client, {"telefono": "123"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Error"
        assert body["validationErrors"] == {
            "nombre": "El nombre no puede estar vacío",
            "email": "El email no puede estar vacío",
        }

    @pytest.mark.parametrize(
        "nombre",
        [
            "Robert'); DROP TABLE clientes;--",
            "<script>alert('xss')</script>",
            "Juan Perez\n",
        ],
    )
    def test_create_injection_payload_returns_400(self, api_client, nombre):
        response = _create(api_client, {**MARIA, "nombre": nombre})

        assert response.status_code == 400
        assert response.json()["validationErrors"]["nombre"] == (
            "El nombre solo puede contener letras y espacios"
        )
        assert Customer.objects.count() == 0

    def test_trailing_newline_twin_is_rejected(self, api_client, make_customer):
        make_customer(name="Juan Perez", email="juan@example.com")

        response = _create(api_client, {"nombre": "Juan Perez\n", "email": "otro@example.com"})

        assert response.status_code == 400
        assert Customer.objects.count() == 1

    def test_create_invalid_email_returns_400(self, api_client):
        response = _create(api_client, {**MARIA, "email": "no-es-un-email"})
        assert response.status_code == 400
        assert response.json()["validationErrors"] == {"email": "El email debe ser válido"}

    def test_create_non_object_body_returns_400(self, api_client):
        response = api_client.post(BASE_URL, [MARIA], format="json")
        assert response.status_code == 400
        assert response.json()["error"] == "Bad Request"


# ===========================================================================
# RETRIEVE / SEARCH
# ===========================================================================


class TestCustomerRetrieve:
    def test_retrieve_after_create(self, api_client):
        created = _create(api_client).json()

        response = api_client.get(f"{BASE_URL}/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["nombre"] == MARIA["nombre"]
        assert data["email"] == MARIA["email"]
        assert data["telefono"] == MARIA["telefono"]

    def test_retrieve_not_found(self, api_client):
        response = api_client.get(f"{BASE_URL}/999999")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Not Found"
        assert body["status"] == 404
        assert body["message"] == "Cliente no encontrado con id: 999999"
        assert body["path"] == f"{BASE_URL}/999999"

    def test_retrieve_non_integer_id_returns_400(self, api_client):
        response = api_client.get(f"{BASE_URL}/abc")
        assert response.status_code == 400
        assert response.json()["error"] == "Bad Request"


class TestCustomerSearch:
    def test_search_by_exact_name(self, api_client, make_customer):
        customer = make_customer()

        response = api_client.get(f"{BASE_URL}/buscar", {"nombre": "Maria Lopez"})

        assert response.status_code == 200
        assert response.json()["id"] == customer.id

    def test_search_finds_inactive_customer(self, api_client, make_customer):
        make_customer(active=False)
        response = api_client.get(f"{BASE_URL}/buscar", {"nombre": "Maria Lopez"})
        assert response.status_code == 200
        assert response.json()["activo"] is False

    def test_search_not_found(self, api_client, make_customer):
        make_customer()
        response = api_client.get(f"{BASE_URL}/buscar", {"nombre": "Maria"})
        assert response.status_code == 404
        assert response.json()["message"] == "Cliente no encontrado con nombre: Maria"

    def test_search_without_name_returns_400(self, api_client):
        response = api_client.get(f"{BASE_URL}/buscar")
        assert response.status_code == 400


# ===========================================================================
# LIST
# ===========================================================================


class TestCustomerList:
    def test_list_empty(self, api_client):
        response = api_client.get(BASE_URL)
        assert response.status_code == 200
        assert response.json() == []

    def test_list_returns_only_active(self, api_client, make_customer):
        active = make_customer(name="Ana Ruiz", email="ana@example.com")
        make_customer(name="Luis Gil", email="luis@example.com", active=False)

        response = api_client.get(BASE_URL)

        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [active.id]

    def test_list_excludes_soft_deleted(self, api_client):
        created = _create(api_client).json()
        api_client.delete(f"{BASE_URL}/{created['id']}")

        assert api_client.get(BASE_URL).json() == []


# ===========================================================================
# UPDATE
# ===========================================================================


class TestCustomerUpdate:
    def test_update_success(self, api_client):
        created = _create(api_client).json()
        payload = {
            "nombre": "Maria Lopez Diaz",
            "email": "maria.diaz@example.com",
            "telefono": "0999999999",
        }

        response = api_client.put(f"{BASE_URL}/{created['id']}", payload, format="json")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created["id"]
        assert data["nombre"] == "Maria Lopez Diaz"
        assert data["email"] == "maria.diaz@example.com"
        assert data["telefono"] == "0999999999"
        assert data["fechaRegistro"] == created["fechaRegistro"]
        assert data["activo"] is True

    def test_update_keeping_own_name(self, api_client):
        created = _create(api_client).json()
        response = api_client.put(
            f"{BASE_URL}/{created['id']}", {**MARIA, "telefono": "111"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["telefono"] == "111"

    def test_update_to_taken_name_returns_409(self, api_client, make_customer):
        make_customer(name="Ana Ruiz", email="ana@example.com")
        created = _create(api_client).json()

        response = api_client.put(
            f"{BASE_URL}/{created['id']}", {**MARIA, "nombre": "Ana Ruiz"}, format="json"
        )

        assert response.status_code == 409
        assert Customer.objects.get(id=created["id"]).name == "Maria Lopez"

    def test_update_not_found(self, api_client):
        response = api_client.put(f"{BASE_URL}/999999", MARIA, format="json")
        assert response.status_code == 404

    def test_update_invalid_body_returns_400(self, api_client):
        created = _create(api_client).json()
        response = api_client.put(
            f"{BASE_URL}/{created['id']}", {**MARIA, "nombre": "X"}, format="json"
        )
        assert response.status_code == 400
        assert "nombre" in response.json()["validationErrors"]

    def test_update_does_not_reactivate(self, api_client, make_customer):
        customer = make_customer(active=False)
        response = api_client.put(f"{BASE_URL}/{customer.id}", MARIA, format="json")
        assert response.status_code == 200
        assert response.json()["activo"] is False


# ===========================================================================
# DELETE (soft) / DELETE permanente (hard)
# ===========================================================================


class TestCustomerDelete:
    def test_soft_delete_keeps_record_visible_by_id(self, api_client):
        created = _create(api_client).json()

        response = api_client.delete(f"{BASE_URL}/{created['id']}")
        assert response.status_code == 204
        assert response.content == b""

        fetched = api_client.get(f"{BASE_URL}/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["activo"] is False

    def test_soft_delete_is_idempotent(self, api_client):
        created = _create(api_client).json()

        assert api_client.delete(f"{BASE_URL}/{created['id']}").status_code == 204
        assert api_client.delete(f"{BASE_URL}/{created['id']}").status_code == 204
        assert Customer.objects.get(id=created["id"]).active is False

    def test_soft_delete_preserves_registration_time(self, api_client):
        created = _create(api_client).json()
        api_client.delete(f"{BASE_URL}/{created['id']}")
        fetched = api_client.get(f"{BASE_URL}/{created['id']}").json()
        assert fetched["fechaRegistro"] == created["fechaRegistro"]

    def test_soft_delete_not_found(self, api_client):
        assert api_client.delete(f"{BASE_URL}/999999").status_code == 404

    def test_hard_delete_removes_record(self, api_client):
        created = _create(api_client).json()

        response = api_client.delete(f"{BASE_URL}/{created['id']}/permanente")
        assert response.status_code == 204

        assert api_client.get(f"{BASE_URL}/{created['id']}").status_code == 404
        assert not Customer.objects.filter(id=created["id"]).exists()

    def test_hard_delete_not_found(self, api_client):
        assert api_client.delete(f"{BASE_URL}/999999/permanente").status_code == 404

    def test_ids_not_reused_after_hard_delete(self, api_client):
        first = _create(api_client).json()
        api_client.delete(f"{BASE_URL}/{first['id']}/permanente")

        second = _create(api_client).json()
        assert second["id"] > first["id"]
