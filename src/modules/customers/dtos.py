"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the wire contracts of the ``/api/v1/clientes`` resource:
field aliases carry the public (Spanish) names while the Python
attributes keep the entity's names.  DTOs are immutable (``frozen=True``).

- ``CustomerRequestDTO``: input for creation and full update.
- ``CustomerResponseDTO``: output built for every returned record.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from modules.customers.constants import (
    MSG_EMAIL_BLANK,
    MSG_EMAIL_INVALID,
    MSG_NAME_BLANK,
    MSG_NAME_PATTERN,
    MSG_NAME_SIZE,
    MSG_PHONE_SIZE,
    MSG_PHONE_TYPE,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    NAME_PATTERN,
    PHONE_MAX_LENGTH,
)

# ---------------------------------------------------------------------------
# Input DTO
# ---------------------------------------------------------------------------


class CustomerRequestDTO(BaseModel):
    """Immutable DTO for customer create/update requests.

    Each field is checked by one validator that raises the field's
    user-facing message, so a failed request maps cleanly onto
    ``{field: message}``:

    - ``nombre``: required, 2-100 characters, letters (accented Latin
      included) and spaces only.  The character class also rejects
      SQL/HTML injection payloads.
    - ``email``: required, syntactically valid (*email-validator*, no DNS).
    - ``telefono``: optional, at most 15 characters.

    Values are stored exactly as received; nothing is trimmed or
    normalised.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="nombre")
    email: str = Field(alias="email")
    phone: Optional[str] = Field(default=None, alias="telefono")

    @model_validator(mode="before")
    @classmethod
    def fill_required_keys(cls, data: Any) -> Any:
        """Present absent required keys as ``None`` under their wire name.

        Missing and empty values then fail in the field validators with the
        same message, and the error is located by alias.
        """
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        for field in ("name", "email"):
            alias = cls.model_fields[field].alias
            if alias not in data and field not in data:
                data[alias] = None
        return data

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v: Any) -> str:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError(MSG_NAME_BLANK)
        if not isinstance(v, str):
            raise ValueError(MSG_NAME_PATTERN)
        if not NAME_MIN_LENGTH <= len(v) <= NAME_MAX_LENGTH:
            raise ValueError(MSG_NAME_SIZE)
        if not NAME_PATTERN.fullmatch(v):
            raise ValueError(MSG_NAME_PATTERN)
        return v

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v: Any) -> str:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError(MSG_EMAIL_BLANK)
        if not isinstance(v, str):
            raise ValueError(MSG_EMAIL_INVALID)
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(MSG_EMAIL_INVALID) from exc
        return v

    @field_validator("phone", mode="before")
    @classmethod
    def check_phone(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if not isinstance(v, str):
            raise ValueError(MSG_PHONE_TYPE)
        if len(v) > PHONE_MAX_LENGTH:
            raise ValueError(MSG_PHONE_SIZE)
        return v


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class CustomerResponseDTO(BaseModel):
    """Immutable DTO for customer API responses.

    Attributes mirror ``Customer``; ``CustomerSerializer`` renders them
    under the public names ``{id, nombre, email, telefono, fechaRegistro,
    activo}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str = Field(alias="nombre")
    email: Optional[str] = None
    phone: Optional[str] = Field(default=None, alias="telefono")
    registered_at: datetime = Field(alias="fechaRegistro")
    active: bool = Field(alias="activo")
