"""Constraint validation backed by a pydantic model compiled once per resource."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model

from crudgen.core.schema import Constraint, FieldType

WHOLE_PAYLOAD = "."

_EXCLUDED_CONTEXT_KEYS = frozenset({"key"})

_ANNOTATIONS: dict[FieldType, Any] = {
    FieldType.ANY: Any,
    FieldType.STRING: str,
    FieldType.NUMBER: float,
    FieldType.INTEGER: int,
    FieldType.BOOLEAN: bool,
    FieldType.DATE: datetime,
}


@dataclass(frozen=True)
class Violation:
    field_path: str
    kind: str
    value: Any = None
    has_value: bool = False
    context: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ValidationResult:
    payload: Any = None
    violations: list[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


def _annotation(constraint: Constraint) -> Any:
    base: Any = Literal[constraint.choices] if constraint.choices is not None else _ANNOTATIONS[constraint.type]
    annotation = base
    rules: dict[str, Any] = {
        "pattern": constraint.pattern,
        "gt": constraint.gt,
        "ge": constraint.ge,
        "lt": constraint.lt,
        "le": constraint.le,
        "min_length": constraint.min_length,
        "max_length": constraint.max_length,
    }
    rules = {k: v for k, v in rules.items() if v is not None}
    if rules:
        annotation = Annotated[annotation, Field(**rules)]
    if not constraint.required and base is not Any:
        annotation = Optional[annotation]
    return annotation


def _field(constraint: Constraint) -> Any:
    if constraint.required:
        return Field(...)
    return Field(constraint.default if constraint.has_default else None)


def build_payload_model(name: str, constraints: Mapping[str, Constraint]) -> type[BaseModel]:
    fields: dict[str, Any] = {key: (_annotation(c), _field(c)) for key, c in constraints.items()}
    return create_model(  # type: ignore[call-overload,no-any-return]
        name,
        __config__=ConfigDict(extra="ignore", arbitrary_types_allowed=True, allow_inf_nan=False),
        **fields,
    )


def _field_path(loc: tuple[int | str, ...]) -> str:
    if not loc:
        return WHOLE_PAYLOAD
    return ".".join(str(part) for part in loc)


def _violation(error: Mapping[str, Any]) -> Violation:
    kind = str(error["type"])
    has_value = kind != "missing" and "input" in error
    value = error.get("input") if has_value else None
    context = dict(error.get("ctx") or {})
    if has_value:
        context["value"] = value
    context = {k: v for k, v in context.items() if k not in _EXCLUDED_CONTEXT_KEYS and v is not None}
    return Violation(
        field_path=_field_path(tuple(error.get("loc", ()))),
        kind=kind,
        value=value,
        has_value=has_value and value is not None,
        context=context,
    )


def _keep_whole_number(given: Any, validated: Any, constraint: Constraint) -> Any:
    # Integers sent for a number field come back as integers, not floats.
    if constraint.type is FieldType.NUMBER and isinstance(given, int) and not isinstance(given, bool):
        return given
    return validated


def validate(payload: Any, model: type[BaseModel], constraints: Mapping[str, Constraint]) -> ValidationResult:
    """Validate every constrained field, collecting all violations.

    On success the returned payload keeps unknown fields as given, takes the
    validated value for constrained fields and fills declared defaults.
    """
    try:
        validated = model.model_validate(payload)
    except ValidationError as exc:
        return ValidationResult(violations=[_violation(e) for e in exc.errors()])

    result = dict(payload)
    for name, constraint in constraints.items():
        if name in payload or constraint.has_default:
            result[name] = _keep_whole_number(payload.get(name), getattr(validated, name), constraint)
    return ValidationResult(payload=result)
