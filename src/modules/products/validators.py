"""Validation rule sets for the product routes.

Keyed by ViewSet action.  Each set is evaluated in full by the Input Gate
(``modules.core.validation``); messages are part of the public contract.

The third ``price`` rule reports the name message, not a price message.
"""

from __future__ import annotations

from typing import Dict, Tuple

from modules.core.validation import (
    BODY,
    PARAMS,
    Rule,
    is_boolean,
    is_int,
    is_numeric,
    is_positive,
    not_empty,
)

MSG_INVALID_ID = "ID no válido"
MSG_NAME_REQUIRED = "El nombre es obligatorio"
MSG_INVALID_VALUE = "Valor no válido"
MSG_PRICE_POSITIVE = "El precio debe ser mayor a 0"
MSG_INVALID_AVAILABILITY = "Valor para disponibilidad no valida"

ID_RULES: Tuple[Rule, ...] = (
    Rule("id", PARAMS, is_int, MSG_INVALID_ID),
)

PRODUCT_BODY_RULES: Tuple[Rule, ...] = (
    Rule("name", BODY, not_empty, MSG_NAME_REQUIRED),
    Rule("price", BODY, is_numeric, MSG_INVALID_VALUE),
    Rule("price", BODY, is_positive, MSG_PRICE_POSITIVE),
    Rule("price", BODY, not_empty, MSG_NAME_REQUIRED),
)

AVAILABILITY_RULES: Tuple[Rule, ...] = (
    Rule("availability", BODY, is_boolean, MSG_INVALID_AVAILABILITY),
)

PRODUCT_RULE_SETS: Dict[str, Tuple[Rule, ...]] = {
    "list": (),
    "retrieve": ID_RULES,
    "create": PRODUCT_BODY_RULES,
    "update": ID_RULES + PRODUCT_BODY_RULES + AVAILABILITY_RULES,
    "partial_update": ID_RULES,
    "destroy": ID_RULES,
}

# Body fields whose DTO coercion errors report a public message.
DTO_FIELD_MESSAGES: Dict[str, str] = {
    "name": MSG_NAME_REQUIRED,
    "price": MSG_INVALID_VALUE,
    "availability": MSG_INVALID_AVAILABILITY,
}
