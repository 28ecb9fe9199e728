"""Customer field limits and validation messages.

Shared by the entity (column sizes) and the request DTO (shape rules)
so both layers agree on the same constraints.
"""

import re

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 254
PHONE_MAX_LENGTH = 15

NAME_PATTERN = re.compile(r"^[a-zA-ZáéíóúÁÉÍÓÚñÑ ]+\Z")

MSG_NAME_BLANK = "El nombre no puede estar vacío"
MSG_NAME_SIZE = (
    f"El nombre debe tener entre {NAME_MIN_LENGTH} y {NAME_MAX_LENGTH} caracteres"
)
MSG_NAME_PATTERN = "El nombre solo puede contener letras y espacios"
MSG_EMAIL_BLANK = "El email no puede estar vacío"
MSG_EMAIL_INVALID = "El email debe ser válido"
MSG_PHONE_TYPE = "El teléfono debe ser un texto"
MSG_PHONE_SIZE = f"El teléfono no puede exceder {PHONE_MAX_LENGTH} caracteres"

HEALTH_STATUS = "Cliente Service is UP"
