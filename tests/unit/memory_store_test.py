import asyncio

import pytest

from crudgen.core.errors import DomainError, ErrorKind
from crudgen.core.ports.store import Predicate
from crudgen.db import ForeignKey, InMemoryStore


@pytest.fixture
def customers() -> InMemoryStore:
    return InMemoryStore("customer")


@pytest.fixture
def payments(customers: InMemoryStore) -> InMemoryStore:
    return InMemoryStore("payment", foreign_keys=(ForeignKey("customer_id", customers),))


class TestPredicate:
    def test_matches_loosely_against_string_parameters(self) -> None:
        assert Predicate(equals={"id": "7"}).matches({"id": 7})
        assert not Predicate(equals={"id": "8"}).matches({"id": 7})

    def test_always_true_adds_guard_clause(self) -> None:
        predicate = Predicate.always_true()

        assert not predicate.is_empty
        assert predicate.equals == {}
        assert predicate.not_equals == {"id": 0}
        assert predicate.matches({"id": 3})

    def test_always_true_keeps_scope(self) -> None:
        predicate = Predicate.always_true({"customer_id": "1"})

        assert predicate.matches({"id": 3, "customer_id": 1})
        assert not predicate.matches({"id": 3, "customer_id": 2})


def test_insert_assigns_ids(customers: InMemoryStore) -> None:
    first = asyncio.run(customers.insert({"name": "Ann"}))
    second = asyncio.run(customers.insert({"name": "Bob"}))

    assert first == {"name": "Ann", "id": 1}
    assert second["id"] == 2
    assert asyncio.run(customers.fetch_all(Predicate())) == [first, second]


def test_fetch_one_returns_copies(customers: InMemoryStore) -> None:
    asyncio.run(customers.insert({"name": "Ann"}))

    row = asyncio.run(customers.fetch_one(Predicate(equals={"id": "1"})))
    assert row is not None
    row["name"] = "changed"

    assert customers.rows[1]["name"] == "Ann"
    assert asyncio.run(customers.fetch_one(Predicate(equals={"id": "2"}))) is None


def test_replace_missing_row_raises(customers: InMemoryStore) -> None:
    with pytest.raises(DomainError) as exc_info:
        asyncio.run(customers.replace({"id": 5, "name": "Ann"}))

    assert exc_info.value.kind is ErrorKind.NO_ROWS_UPDATED


def test_insert_with_missing_reference_raises(payments: InMemoryStore) -> None:
    with pytest.raises(DomainError) as exc_info:
        asyncio.run(payments.insert({"customer_id": "9", "amount": 1.0}))

    assert exc_info.value.kind is ErrorKind.CONSTRAINT_VIOLATION


def test_delete_referenced_row_raises(customers: InMemoryStore, payments: InMemoryStore) -> None:
    asyncio.run(customers.insert({"name": "Ann"}))
    asyncio.run(payments.insert({"customer_id": "1", "amount": 1.0}))

    with pytest.raises(DomainError) as exc_info:
        asyncio.run(customers.delete_one(Predicate(equals={"id": "1"})))

    assert exc_info.value.kind is ErrorKind.CONSTRAINT_VIOLATION
    assert 1 in customers.rows


def test_delete_all_respects_scope(customers: InMemoryStore, payments: InMemoryStore) -> None:
    asyncio.run(customers.insert({"name": "Ann"}))
    asyncio.run(customers.insert({"name": "Bob"}))
    asyncio.run(payments.insert({"customer_id": 1, "amount": 1.0}))
    asyncio.run(payments.insert({"customer_id": 2, "amount": 2.0}))

    asyncio.run(payments.delete_all(Predicate.always_true({"customer_id": "1"})))

    assert [r["customer_id"] for r in payments.rows.values()] == [2]


def test_delete_all_leaves_rows_when_any_is_referenced(customers: InMemoryStore, payments: InMemoryStore) -> None:
    asyncio.run(customers.insert({"name": "Ann"}))
    asyncio.run(customers.insert({"name": "Bob"}))
    asyncio.run(payments.insert({"customer_id": 2, "amount": 2.0}))

    with pytest.raises(DomainError) as exc_info:
        asyncio.run(customers.delete_all(Predicate.always_true()))

    assert exc_info.value.kind is ErrorKind.CONSTRAINT_VIOLATION
    assert sorted(customers.rows) == [1, 2]
