"""Declarative REST CRUD resources on FastAPI.

Usage::

    from crudgen import CrudGenerator, ResourceDescriptor, string
    from crudgen.db import InMemoryStore

    generator = CrudGenerator(app)
    generator.crud(ResourceDescriptor(store=InMemoryStore(), base_path="/customers",
                                      fields={"name": string(pattern=r"^[A-Za-z ]*$")}))
"""

from crudgen.api.generator import CrudGenerator
from crudgen.core.context import RequestContext
from crudgen.core.errors import DomainError, ErrorKind
from crudgen.core.options import CrudOptions
from crudgen.core.ports.store import Predicate, ResourceStore
from crudgen.core.resource import Operation, ResourceDescriptor, ResourceHandle, register_resource
from crudgen.core.schema import (
    OMITTED,
    Constraint,
    FieldType,
    any_,
    boolean,
    date,
    integer,
    number,
    omitted,
    string,
)

__all__ = [
    "OMITTED",
    "Constraint",
    "CrudGenerator",
    "CrudOptions",
    "DomainError",
    "ErrorKind",
    "FieldType",
    "Operation",
    "Predicate",
    "RequestContext",
    "ResourceDescriptor",
    "ResourceHandle",
    "ResourceStore",
    "any_",
    "boolean",
    "date",
    "integer",
    "number",
    "omitted",
    "register_resource",
    "string",
]
