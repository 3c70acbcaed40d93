"""Customers and their payments, exposed as a top-level and a nested resource."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Column, Date, Float, ForeignKey, Integer, MetaData, String, Table
from sqlalchemy.ext.asyncio import AsyncEngine

from crudgen.core.context import RequestContext
from crudgen.core.ports.store import ResourceStore
from crudgen.core.resource import ResourceDescriptor
from crudgen.core.schema import date, number, omitted, string
from crudgen.db import memory
from crudgen.db.memory import InMemoryStore
from crudgen.db.sql import SqlAlchemyStore

metadata = MetaData()

customer_table = Table(
    "customer",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255)),
    Column("employment_status", String(64)),
    Column("created", Date),
)

payment_table = Table(
    "payment",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("customer_id", Integer, ForeignKey("customer.id"), nullable=False),
    Column("amount", Float),
    Column("date", Date),
)

CUSTOMER_FIELDS = {
    "name": string(pattern=r"^[A-Za-z ]*$"),
    "employmentStatus": string(default="Unemployed"),
    "payments": omitted(),
    "created": date(format="%Y-%m-%d"),
}

PAYMENT_FIELDS = {
    "amount": number(gt=0),
    "date": date(format="%Y-%m-%d"),
}


def payment_scope(request: RequestContext) -> dict[str, Any]:
    return {"customerId": request.params["customerId"]}


def memory_stores() -> dict[str, ResourceStore]:
    customers = InMemoryStore("customer")
    payments = InMemoryStore("payment", foreign_keys=(memory.ForeignKey("customer_id", customers),))
    return {"customers": customers, "payments": payments}


def sql_stores(engine: AsyncEngine) -> dict[str, ResourceStore]:
    return {
        "customers": SqlAlchemyStore(engine, customer_table),
        "payments": SqlAlchemyStore(engine, payment_table),
    }


async def init_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


def descriptors(stores: dict[str, ResourceStore]) -> list[ResourceDescriptor]:
    return [
        ResourceDescriptor(store=stores["customers"], base_path="/customers", fields=CUSTOMER_FIELDS),
        ResourceDescriptor(
            store=stores["payments"],
            base_path="/customers/{customerId}/payments",
            fields=PAYMENT_FIELDS,
            scope=payment_scope,
        ),
    ]
