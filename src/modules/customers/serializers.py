"""Customer DRF serializers for API output.

The serializer operates at the Interface layer (API Views) and only
renders: request parsing and validation belong to ``CustomerRequestDTO``.
It reads a ``CustomerResponseDTO`` (or a ``Customer``, whose attribute
names are the same) and emits the public field names.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    """Read-only serializer for the Customer resource."""

    nombre = serializers.CharField(source="name", read_only=True)
    telefono = serializers.CharField(source="phone", read_only=True, allow_null=True)
    fechaRegistro = serializers.DateTimeField(source="registered_at", read_only=True)
    activo = serializers.BooleanField(source="active", read_only=True)

    class Meta:
        model = Customer
        fields = ["id", "nombre", "email", "telefono", "fechaRegistro", "activo"]
        read_only_fields = fields
