"""In-place payload normalization applied before validation, and entity rendering for output."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from crudgen.core.context import RequestContext
from crudgen.core.schema import Constraint, FieldSpec, FieldType, Omitted, ScopeFn


def set_foreign_keys(context: RequestContext, scope: ScopeFn | None) -> None:
    """Overwrite every scope key of the payload with the value from the route parameters."""
    if scope is None:
        return
    for name in scope(context):
        context.payload[name] = context.params.get(name)


def format_numbers(payload: dict[str, Any], fields: Mapping[str, FieldSpec]) -> None:
    for name, spec in fields.items():
        if isinstance(spec, Constraint) and spec.is_numeric and payload.get(name) is None:
            payload[name] = 0


def parse_date(value: Any, fmt: str | None) -> Any:
    """Convert an external date representation, leaving unparseable values for the validator to reject."""
    if not isinstance(value, str):
        return value
    try:
        if fmt:
            return datetime.strptime(value, fmt)
        return datetime.fromisoformat(value)
    except ValueError:
        return value


def format_dates(payload: dict[str, Any], fields: Mapping[str, FieldSpec]) -> None:
    for name, spec in fields.items():
        if isinstance(spec, Constraint) and spec.type is FieldType.DATE and payload.get(name) is not None:
            payload[name] = parse_date(payload[name], spec.format)


def strip_omitted(attrs: dict[str, Any] | None, fields: Mapping[str, FieldSpec]) -> None:
    if attrs is None:
        return
    for name, spec in fields.items():
        if isinstance(spec, Omitted):
            attrs.pop(name, None)


def normalize_payload(context: RequestContext, fields: Mapping[str, FieldSpec], scope: ScopeFn | None) -> None:
    """Foreign keys, numeric defaults, date coercion, omitted stripping; in that order."""
    if not isinstance(context.payload, dict):
        return
    set_foreign_keys(context, scope)
    format_numbers(context.payload, fields)
    format_dates(context.payload, fields)
    strip_omitted(context.payload, fields)


def render_entity(attrs: Mapping[str, Any], fields: Mapping[str, FieldSpec]) -> dict[str, Any]:
    """Output form of an entity already in external names: dates formatted, omitted fields removed."""
    rendered = dict(attrs)
    for name, spec in fields.items():
        if isinstance(spec, Constraint) and spec.type is FieldType.DATE:
            value = rendered.get(name)
            if isinstance(value, (date, datetime)):
                rendered[name] = value.strftime(spec.format) if spec.format else value.isoformat()
    strip_omitted(rendered, fields)
    return rendered
