"""Field specs for resource payloads and the registration-time schema introspection."""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Final


class FieldType(str, enum.Enum):
    ANY = "any"
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATE = "date"


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Final = _NoDefault()


@dataclass(frozen=True)
class Constraint:
    type: FieldType = FieldType.ANY
    required: bool = False
    default: Any = NO_DEFAULT
    pattern: str | None = None
    gt: float | None = None
    ge: float | None = None
    lt: float | None = None
    le: float | None = None
    min_length: int | None = None
    max_length: int | None = None
    choices: tuple[Any, ...] | None = None
    format: str | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    @property
    def is_numeric(self) -> bool:
        return self.type in (FieldType.NUMBER, FieldType.INTEGER)

    def as_required(self) -> Constraint:
        return dataclasses.replace(self, required=True)


class Omitted:
    """Marks a field that never appears in stored input or in rendered output (e.g. a relation)."""

    def __repr__(self) -> str:
        return "OMITTED"


OMITTED: Final = Omitted()

FieldSpec = Constraint | Omitted
ScopeFn = Callable[[Any], Mapping[str, Any]]


# --- Constraint constructors ---


def any_(**kwargs: Any) -> Constraint:
    return Constraint(FieldType.ANY, **kwargs)


def string(**kwargs: Any) -> Constraint:
    return Constraint(FieldType.STRING, **kwargs)


def number(**kwargs: Any) -> Constraint:
    return Constraint(FieldType.NUMBER, **kwargs)


def integer(**kwargs: Any) -> Constraint:
    return Constraint(FieldType.INTEGER, **kwargs)


def boolean(**kwargs: Any) -> Constraint:
    return Constraint(FieldType.BOOLEAN, **kwargs)


def date(format: str | None = None, **kwargs: Any) -> Constraint:  # noqa: A002
    return Constraint(FieldType.DATE, format=format, **kwargs)


def omitted() -> Omitted:
    return OMITTED


# --- Introspection ---


def extract_validatable_constraints(fields: Mapping[str, FieldSpec | None]) -> dict[str, Constraint]:
    """Return the entries that carry a real constraint, dropping omitted markers and empty entries."""
    return {name: spec for name, spec in fields.items() if isinstance(spec, Constraint)}


def derive_required_scope_fields(fields: dict[str, FieldSpec], scope: ScopeFn | None, probe: Any) -> None:
    """Mark every key the scope function derives as a required field of ``fields``.

    ``probe`` is a neutral request context; the scope function is only called to
    enumerate the keys it produces, its values are ignored.
    """
    if scope is None:
        return
    for name in scope(probe):
        spec = fields.get(name)
        if spec is None:
            fields[name] = any_(required=True)
        elif isinstance(spec, Constraint):
            fields[name] = spec.as_required()
