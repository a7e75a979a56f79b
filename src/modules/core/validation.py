"""Declarative request validation (Input Gate).

A rule set is a static, inspectable tuple of :class:`Rule` entries, each
naming one field, where to read it from (path parameters or body) and the
predicate it must satisfy.  :func:`evaluate` runs every rule of a set in
declaration order and collects one :class:`Violation` per failure; it never
stops at the first one.

:class:`InputGateMixin` plugs the evaluation into a DRF view: the rule set
bound to the current action runs right after DRF's own ``initial()``
checks, and a non-empty violation list short-circuits the request with::

    HTTP 400 {"errors": [{"type", "value", "msg", "path", "location"}, ...]}
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Literal, Sequence

import structlog
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError
from rest_framework import status
from rest_framework.response import Response

logger = structlog.get_logger(__name__)

Location = Literal["params", "body"]

PARAMS: Location = "params"
BODY: Location = "body"


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

_INT_RE = re.compile(r"^[-+]?(?:0|[1-9][0-9]*)$")
_NUMERIC_RE = re.compile(r"^[+-]?([0-9]*[.])?[0-9]+$")
_BOOLEAN_STRINGS = frozenset({"true", "false", "1", "0"})


def as_text(value: Any) -> str:
    """Stringify a raw request value the way the checks below see it.

    Missing and ``None`` become ``""``; JSON booleans become
    ``"true"`` / ``"false"``.
    """
    if value is MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def is_int(value: Any) -> bool:
    if isinstance(value, (bool, list, dict)):
        return False
    return bool(_INT_RE.match(as_text(value)))


def is_numeric(value: Any) -> bool:
    if isinstance(value, (bool, list, dict)):
        return False
    return bool(_NUMERIC_RE.match(as_text(value)))


def is_positive(value: Any) -> bool:
    """``value > 0`` after numeric coercion; anything non-numeric fails."""
    if value is MISSING or value is None or isinstance(value, (list, dict)):
        return False
    if isinstance(value, bool):
        return value
    try:
        return Decimal(str(value)) > 0
    except (InvalidOperation, ValueError):
        return False


def not_empty(value: Any) -> bool:
    return len(as_text(value)) > 0


def is_boolean(value: Any) -> bool:
    return as_text(value) in _BOOLEAN_STRINGS


# ---------------------------------------------------------------------------
# Rules and violations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rule:
    """One field check: ``predicate(value)`` must hold or ``message`` is reported."""

    field: str
    location: Location
    predicate: Callable[[Any], bool]
    message: str


@dataclass(frozen=True)
class Violation:
    """A single failed rule, rendered into the ``errors`` array."""

    field: str
    location: Location
    message: str
    value: Any = MISSING

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": "field"}
        if self.value is not MISSING:
            data["value"] = self.value
        data["msg"] = self.message
        data["path"] = self.field
        data["location"] = self.location
        return data


class InputRejected(Exception):
    """Raised when a request fails one or more validation rules."""

    def __init__(self, violations: Sequence[Violation]) -> None:
        self.violations = list(violations)
        super().__init__(", ".join(v.message for v in self.violations))


def _lookup(source: Any, field: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(field, MISSING)
    return MISSING


def evaluate(
    rules: Sequence[Rule],
    *,
    params: Mapping[str, Any] | None = None,
    body: Any = None,
) -> List[Violation]:
    """Run every rule in order and return the collected violations."""
    sources = {PARAMS: params or {}, BODY: body if body is not None else {}}
    violations: List[Violation] = []
    for rule in rules:
        value = _lookup(sources[rule.location], rule.field)
        if not rule.predicate(value):
            violations.append(
                Violation(
                    field=rule.field,
                    location=rule.location,
                    message=rule.message,
                    value=value,
                )
            )
    return violations


RULE_ERROR = "rule_violation"


def rule_error(message: str) -> PydanticCustomError:
    """Error for DTO validators whose text is already a public message."""
    return PydanticCustomError(RULE_ERROR, message)


def violations_from_pydantic(
    exc: PydanticValidationError,
    messages: Mapping[str, str] | None = None,
) -> List[Violation]:
    """Translate DTO coercion errors into body violations.

    Errors raised through :func:`rule_error` keep their text.  Any other
    error on a field listed in ``messages`` reports that field's message
    instead of pydantic's own wording.
    """
    messages = messages or {}
    violations: List[Violation] = []
    for error in exc.errors(include_url=False):
        loc = error.get("loc") or ("",)
        field = str(loc[0])
        value = MISSING if error.get("type") == "missing" else error.get("input")
        message = error.get("msg", "")
        if error.get("type") != RULE_ERROR:
            message = messages.get(field, message)
        violations.append(
            Violation(
                field=field,
                location=BODY,
                message=message,
                value=value,
            )
        )
    return violations


# ---------------------------------------------------------------------------
# DRF integration
# ---------------------------------------------------------------------------


class InputGateMixin:
    """Run ``rule_sets[self.action]`` before the handler executes.

    ``rule_sets`` maps a ViewSet action name to its rule tuple.  Actions
    without an entry are not validated.  Handlers may also raise
    :class:`InputRejected` themselves; it is rendered the same way.
    """

    rule_sets: Mapping[str, Sequence[Rule]] = {}

    def initial(self, request, *args, **kwargs) -> None:
        super().initial(request, *args, **kwargs)
        rules = self.rule_sets.get(getattr(self, "action", None) or "", ())
        if not rules:
            return
        needs_body = any(rule.location == BODY for rule in rules)
        violations = evaluate(
            rules,
            params=kwargs,
            body=request.data if needs_body else None,
        )
        if violations:
            raise InputRejected(violations)

    def handle_exception(self, exc):
        if isinstance(exc, InputRejected):
            logger.info(
                "request.rejected",
                action=getattr(self, "action", None),
                paths=[v.field for v in exc.violations],
            )
            return Response(
                {"errors": [v.as_dict() for v in exc.violations]},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return super().handle_exception(exc)
