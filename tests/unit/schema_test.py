import dataclasses

from crudgen.core.context import probe_context
from crudgen.core.schema import (
    OMITTED,
    Constraint,
    FieldType,
    Omitted,
    any_,
    date,
    derive_required_scope_fields,
    extract_validatable_constraints,
    number,
    omitted,
    string,
)


def test_omitted_is_a_distinct_variant() -> None:
    assert omitted() is OMITTED
    assert isinstance(OMITTED, Omitted)
    assert not isinstance(OMITTED, Constraint)


def test_constructors_set_field_type() -> None:
    assert string().type is FieldType.STRING
    assert number(gt=0).gt == 0
    assert date(format="%Y-%m-%d").format == "%Y-%m-%d"
    assert any_().type is FieldType.ANY
    assert not string().has_default
    assert string(default="Unemployed").has_default


def test_as_required_returns_a_copy() -> None:
    original = string(pattern="^[a-z]*$")
    required = original.as_required()

    assert required.required
    assert not original.required
    assert dataclasses.replace(required, required=False) == original


def test_extract_validatable_constraints_drops_omitted_and_empty_entries() -> None:
    name = string(pattern=r"^[A-Za-z ]*$")
    fields = {"name": name, "payments": OMITTED, "legacy": None}

    assert extract_validatable_constraints(fields) == {"name": name}


def test_derive_required_scope_fields_marks_existing_and_adds_missing() -> None:
    fields = {"name": string(pattern=r"^[A-Za-z ]*$"), "customerId": number()}

    def scope(request):  # type: ignore[no-untyped-def]
        return {"customerId": request.params["customerId"], "purchaseId": request.params["purchaseId"]}

    derive_required_scope_fields(fields, scope, probe_context())

    assert not fields["name"].required  # type: ignore[union-attr]
    assert fields["customerId"].required  # type: ignore[union-attr]
    assert fields["customerId"].type is FieldType.NUMBER  # type: ignore[union-attr]
    assert fields["purchaseId"] == any_(required=True)


def test_derive_required_scope_fields_leaves_omitted_markers() -> None:
    fields = {"customerId": OMITTED}

    derive_required_scope_fields(fields, lambda request: {"customerId": 1}, probe_context())

    assert fields["customerId"] is OMITTED


def test_derive_required_scope_fields_without_scope_is_a_no_op() -> None:
    fields = {"name": string()}

    derive_required_scope_fields(fields, None, probe_context())

    assert fields == {"name": string()}
