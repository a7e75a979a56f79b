"""Product model.

Business rules implemented:
- RN-PRO-001: Name is required and cannot be empty.
- RN-PRO-002: Price must be greater than zero.
- RN-PRO-003: Availability defaults to ``True`` and is only flipped by the
  partial-update operation (enforced at service layer).
- RN-PRO-004: Deletion is permanent (no soft delete).
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import TimestampedModel


class Product(TimestampedModel):
    """Product aggregate root.

    ``id`` is assigned by the store on insert and never changes.
    """

    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    availability = models.BooleanField(default=True)

    class Meta:
        db_table = "products"
        ordering = ["-price", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.CheckConstraint(
                condition=~models.Q(name=""),
                name="products_name_not_empty",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if not self.name:
            raise ValidationError({"name": "Name is required."})
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": "Price must be greater than zero."})

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def toggle_availability(self) -> bool:
        """Negate ``availability`` in memory and return the new value."""
        self.availability = not self.availability
        return self.availability

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"#{self.pk} - {self.name}"
