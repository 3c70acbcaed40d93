"""Resource descriptors and their registration-time resolution into immutable handles."""

from __future__ import annotations

import enum
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from crudgen.core.context import probe_context
from crudgen.core.naming import camelize
from crudgen.core.ports.store import ResourceStore
from crudgen.core.schema import (
    Constraint,
    FieldSpec,
    ScopeFn,
    derive_required_scope_fields,
    extract_validatable_constraints,
)
from crudgen.core.validation import build_payload_model

logger = logging.getLogger(__name__)

Hook = Callable[[dict[str, Any]], Awaitable[None] | None]


class Operation(str, enum.Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    REPLACE = "replace"
    DELETE = "delete"
    DELETE_ALL = "delete_all"


ALL_OPERATIONS = frozenset(Operation)


@dataclass(frozen=True)
class ResourceDescriptor:
    store: ResourceStore
    base_path: str
    fields: Mapping[str, FieldSpec] = field(default_factory=dict)
    scope: ScopeFn | None = None
    after_create: Hook | None = None
    after_update: Hook | None = None
    operations: frozenset[Operation] = ALL_OPERATIONS
    name: str | None = None


@dataclass(frozen=True)
class ResourceHandle:
    """A registered resource: schema resolved once, shared read-only by every request."""

    descriptor: ResourceDescriptor
    name: str
    fields: Mapping[str, FieldSpec]
    constraints: Mapping[str, Constraint]
    payload_model: type[BaseModel]

    @property
    def store(self) -> ResourceStore:
        return self.descriptor.store

    @property
    def base_path(self) -> str:
        return self.descriptor.base_path

    @property
    def scope(self) -> ScopeFn | None:
        return self.descriptor.scope

    def allows(self, operation: Operation) -> bool:
        return operation in self.descriptor.operations


def _resource_name(base_path: str) -> str:
    segments = [s for s in base_path.strip("/").split("/") if s and not s.startswith("{")]
    return camelize(segments[-1]) if segments else "resource"


def register_resource(descriptor: ResourceDescriptor) -> ResourceHandle:
    fields: dict[str, FieldSpec] = dict(descriptor.fields)
    derive_required_scope_fields(fields, descriptor.scope, probe_context())
    constraints = extract_validatable_constraints(fields)
    name = descriptor.name or _resource_name(descriptor.base_path)
    model_name = f"{name[:1].upper()}{name[1:]}Payload"
    logger.debug("Resolved resource %s at %s with fields %s", name, descriptor.base_path, sorted(fields))
    return ResourceHandle(
        descriptor=descriptor,
        name=name,
        fields=MappingProxyType(fields),
        constraints=MappingProxyType(constraints),
        payload_model=build_payload_model(model_name, constraints),
    )
