"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``) and only carry
request bodies that already passed the route's validation rules; they
coerce the raw JSON values into domain types.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for full (PUT) product updates.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, field_validator

from modules.core.validation import rule_error
from modules.products.validators import MSG_INVALID_VALUE, MSG_PRICE_POSITIVE

CENT = Decimal("0.01")
MAX_PRICE = Decimal("99999999.99")


def _normalise_price(v: Decimal) -> Decimal:
    if v > MAX_PRICE:
        raise rule_error(MSG_INVALID_VALUE)
    v = v.quantize(CENT, rounding=ROUND_HALF_UP)
    if v <= 0:
        raise rule_error(MSG_PRICE_POSITIVE)
    return v


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    ``availability`` is optional and defaults to ``True``.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    name: str
    price: Decimal
    availability: bool = True

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        return _normalise_price(v)


class UpdateProductDTO(BaseModel):
    """Immutable DTO for full product updates.

    All three fields are required; they replace the stored values.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    name: str
    price: Decimal
    availability: bool

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        return _normalise_price(v)
