"""External error-response bodies for domain errors and validation violations."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from crudgen.core.errors import DomainError
from crudgen.core.validation import WHOLE_PAYLOAD, Violation


def error_body(error: DomainError) -> dict[str, Any]:
    return {"error": {"exception": error.kind.value, "detailMessage": error.message}}


def _violation_key(violations: Sequence[Violation], violation: Violation) -> str:
    if len(violations) == 1 and violation.field_path in ("", WHOLE_PAYLOAD):
        return WHOLE_PAYLOAD
    return violation.field_path


def violation_entry(violation: Violation) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "attributes": {k: str(v) for k, v in violation.context.items()},
        "constraintClassName": violation.kind,
    }
    if violation.has_value:
        entry["invalidValue"] = violation.value
    entry["messageTemplate"] = violation.kind
    return entry


def violations_body(violations: Sequence[Violation]) -> dict[str, Any]:
    return {"validationErrors": {_violation_key(violations, v): violation_entry(v) for v in violations}}
