"""Product DRF serializers for API output.

Input is validated by the route rule sets and coerced by the DTOs in
``dtos.py``; this serializer only renders the public representation.
Store-managed timestamps are never exposed.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read-only representation of the Product resource."""

    price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        coerce_to_string=False,
        read_only=True,
    )

    class Meta:
        model = Product
        fields = ["id", "name", "price", "availability"]
        read_only_fields = fields
