"""Customer entity.

Business rules implemented at the persistence level:
- ``name`` and ``email`` are unique across the whole table, whether the
  customer is active or soft-deleted.
- ``registered_at`` is stamped once, when the row is inserted, and is
  never part of an UPDATE afterwards.
- ``active`` defaults to ``True``; soft delete flips it to ``False``.
"""

from __future__ import annotations

from django.core.validators import MinLengthValidator, RegexValidator
from django.db import models
from django.utils import timezone

from modules.customers.constants import (
    EMAIL_MAX_LENGTH,
    MSG_NAME_PATTERN,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    NAME_PATTERN,
    PHONE_MAX_LENGTH,
)


class Customer(models.Model):
    """Customer aggregate root (table ``clientes``).

    ``id`` comes from the database sequence, so it is never reused even
    after a hard delete.  ``email`` stays nullable at the storage level;
    the API layer is what makes it mandatory.
    """

    IMMUTABLE_FIELDS = ("registered_at",)

    name = models.CharField(
        max_length=NAME_MAX_LENGTH,
        unique=True,
        validators=[
            MinLengthValidator(NAME_MIN_LENGTH),
            RegexValidator(NAME_PATTERN, MSG_NAME_PATTERN),
        ],
    )
    email = models.EmailField(  # noqa: DJ001
        max_length=EMAIL_MAX_LENGTH, unique=True, null=True, blank=True
    )
    phone = models.CharField(  # noqa: DJ001
        max_length=PHONE_MAX_LENGTH, null=True, blank=True
    )
    registered_at = models.DateTimeField(editable=False)
    active = models.BooleanField(default=True)

    class Meta:
        db_table = "clientes"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["active"], name="clientes_active_idx"),
        ]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _on_create(self) -> None:
        """Self-normalization applied exactly once, before the INSERT."""
        if self.registered_at is None:
            self.registered_at = timezone.now()
        if self.active is None:
            self.active = True

    def _updatable_fields(self) -> list[str]:
        return [
            field.name
            for field in self._meta.concrete_fields
            if not field.primary_key and field.name not in self.IMMUTABLE_FIELDS
        ]

    def save(self, *args, **kwargs) -> None:
        if self._state.adding:
            self._on_create()
        else:
            update_fields = kwargs.get("update_fields")
            if update_fields is None:
                kwargs["update_fields"] = self._updatable_fields()
            else:
                kwargs["update_fields"] = [
                    name for name in update_fields if name not in self.IMMUTABLE_FIELDS
                ]
        super().save(*args, **kwargs)

    def deactivate(self) -> None:
        """Soft delete: mark inactive.  Re-deactivating is a no-op write."""
        self.active = False

    def __str__(self) -> str:
        state = "active" if self.active else "inactive"
        return f"{self.name} (#{self.pk}, {state})"
