import pytest

from crudgen.core.naming import camelize, to_external, to_internal, underscore


class TestUnderscore:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("name", "name"),
            ("customerId", "customer_id"),
            ("employmentStatus", "employment_status"),
            ("address2Line", "address2_line"),
            ("first-name", "first_name"),
            ("first name", "first_name"),
        ],
    )
    def test_underscore(self, name: str, expected: str) -> None:
        assert underscore(name) == expected


class TestCamelize:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("name", "name"),
            ("customer_id", "customerId"),
            ("CUSTOMER_ID", "customerId"),
            ("first-name", "firstName"),
            ("first.name", "firstName"),
            ("first  name", "firstName"),
            ("first__-name", "firstName"),
            ("_id", "id"),
        ],
    )
    def test_camelize(self, name: str, expected: str) -> None:
        assert camelize(name) == expected


def test_to_internal_converts_every_key() -> None:
    attrs = {"name": "myName", "customerId": "myCustomerId"}

    assert to_internal(attrs) == {"name": "myName", "customer_id": "myCustomerId"}


def test_to_external_converts_every_key() -> None:
    attrs = {"id": 1, "employment_status": "Employed"}

    assert to_external(attrs) == {"id": 1, "employmentStatus": "Employed"}


@pytest.mark.parametrize("name", ["id", "name", "customer_id", "employment_status", "address2_line"])
def test_round_trip_through_external_names(name: str) -> None:
    assert to_internal(to_external({name: "v"})) == {name: "v"}


@pytest.mark.parametrize("name", ["id", "customerId", "employmentStatus", "address2Line"])
def test_round_trip_through_internal_names(name: str) -> None:
    assert to_external(to_internal({name: "v"})) == {name: "v"}


@pytest.mark.parametrize("name", ["id", "name", "customerId", "employmentStatus", "address2Line"])
def test_external_names_survive_a_round_trip(name: str) -> None:
    assert to_external({name: "v"}) == {name: "v"}
    assert to_external(to_internal(to_external({name: "v"}))) == {name: "v"}
    assert to_internal(to_external({name: "v"})) == {underscore(name): "v"}
