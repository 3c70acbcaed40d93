"""Generates the standard REST operations for a resource on a FastAPI router."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, FastAPI, Request, Response, status

from crudgen.api.pipeline import Guard, Handler, RouteSpec, hook_task, json_response, run
from crudgen.core.context import RequestContext
from crudgen.core.errors import BodyIdDoesNotMatchPathError, BodyIdIsNotNullError
from crudgen.core.naming import to_external, to_internal
from crudgen.core.normalize import render_entity
from crudgen.core.options import CrudOptions
from crudgen.core.ports.store import Predicate
from crudgen.core.resource import Operation, ResourceDescriptor, ResourceHandle, register_resource
from crudgen.core.scope import filter_predicate, item_predicate, list_predicate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteInfo:
    method: str
    path: str
    name: str
    allowed: bool


def path_id(value: Any) -> Any:
    """Numeric path ids compare as numbers, anything else as given."""
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return value


def render(resource: ResourceHandle, row: dict[str, Any]) -> dict[str, Any]:
    return render_entity(to_external(row), resource.fields)


def _location(context: RequestContext, *segments: Any) -> str:
    path = "/".join([context.path.rstrip("/"), *(str(s) for s in segments)])
    return context.connection.base_url + path


# --- Guards ---


def guard_create(context: RequestContext) -> None:
    if context.payload.get("id") is not None:
        raise BodyIdIsNotNullError()


def guard_replace(context: RequestContext) -> None:
    expected = path_id(context.params.get("id"))
    if context.payload.get("id") is not None and context.payload["id"] != expected:
        raise BodyIdDoesNotMatchPathError()
    context.payload["id"] = expected


# --- Dispatch ---


class _Dispatch:
    def __init__(self, options: CrudOptions) -> None:
        self.options = options

    async def list(self, context: RequestContext, resource: ResourceHandle) -> Response:
        if self.options.allow_filters:
            equals = filter_predicate(context, resource.scope)
        else:
            equals = list_predicate(context, resource.scope)
        rows = await resource.store.fetch_all(Predicate(equals=equals))
        return json_response([render(resource, r) for r in rows])

    async def get(self, context: RequestContext, resource: ResourceHandle) -> Response:
        row = await resource.store.fetch_one(Predicate(equals=item_predicate(context, resource.scope)))
        if row is None:
            return Response(status_code=status.HTTP_404_NOT_FOUND)
        return json_response(render(resource, row))

    async def create(self, context: RequestContext, resource: ResourceHandle) -> Response:
        row = await resource.store.insert(to_internal(context.payload))
        entity = render(resource, row)
        return json_response(
            entity,
            status.HTTP_201_CREATED,
            headers={"Location": _location(context, entity.get("id"))},
            background=hook_task(resource.descriptor.after_create, entity, "after_create"),
        )

    async def replace(self, context: RequestContext, resource: ResourceHandle) -> Response:
        row = await resource.store.replace(to_internal(context.payload))
        entity = render(resource, row)
        return json_response(
            entity,
            headers={"Location": _location(context)},
            background=hook_task(resource.descriptor.after_update, entity, "after_update"),
        )

    async def delete(self, context: RequestContext, resource: ResourceHandle) -> Response:
        await resource.store.delete_one(Predicate(equals=item_predicate(context, resource.scope)))
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    async def delete_all(self, context: RequestContext, resource: ResourceHandle) -> Response:
        await resource.store.delete_all(Predicate.always_true(list_predicate(context, resource.scope)))
        return Response(status_code=status.HTTP_204_NO_CONTENT)


class CrudGenerator:
    """Registers resources on ``router`` and answers their requests through the shared pipeline."""

    def __init__(self, router: APIRouter | FastAPI, options: CrudOptions | None = None) -> None:
        self.router = router
        self.options = options or CrudOptions()
        self.resources: list[ResourceHandle] = []
        self.routes: list[RouteInfo] = []
        self._dispatch = _Dispatch(self.options)

    def crud(self, descriptor: ResourceDescriptor) -> ResourceHandle:
        resource = register_resource(descriptor)
        self.resources.append(resource)
        base = resource.base_path
        item = f"{base}/{{id}}"
        d = self._dispatch

        self._add(resource, Operation.LIST, "GET", base, d.list, validate=False)
        self._add(resource, Operation.GET, "GET", item, d.get, validate=False)
        self._add(resource, Operation.CREATE, "POST", base, d.create, guard=guard_create)
        self._add(resource, Operation.REPLACE, "PUT", item, d.replace, guard=guard_replace)
        self._add(resource, Operation.DELETE, "DELETE", item, d.delete, validate=False)
        self._add(
            resource,
            Operation.DELETE_ALL,
            "DELETE",
            base,
            d.delete_all,
            validate=False,
            allowed=self.options.allow_delete_all,
        )
        return resource

    def route(
        self,
        resource: ResourceHandle,
        method: str,
        path: str,
        handler: Handler,
        *,
        validate: bool = True,
        allowed: bool = True,
        guard: Guard | None = None,
        name: str | None = None,
    ) -> None:
        """Register an ad hoc operation that runs through the same normalize/validate pipeline."""
        spec = RouteSpec(resource=resource, handler=handler, validate=validate, allowed=allowed, guard=guard)
        self._register(spec, method.upper(), path, name or getattr(handler, "__name__", "handler"))

    def _add(
        self,
        resource: ResourceHandle,
        operation: Operation,
        method: str,
        path: str,
        handler: Handler,
        *,
        validate: bool = True,
        allowed: bool = True,
        guard: Guard | None = None,
    ) -> None:
        spec = RouteSpec(
            resource=resource,
            handler=handler,
            validate=validate,
            allowed=allowed and resource.allows(operation),
            guard=guard,
        )
        self._register(spec, method, path, f"{operation.value}_{resource.name}")

    def _register(self, spec: RouteSpec, method: str, path: str, name: str) -> None:
        options = self.options

        async def endpoint(request: Request) -> Response:
            return await run(spec, request, options)

        self.router.add_api_route(
            path,
            endpoint,
            methods=[method],
            name=name,
            tags=[spec.resource.name],
            response_model=None,
        )
        self.routes.append(RouteInfo(method=method, path=path, name=name, allowed=spec.allowed))
        logger.debug("Registered %s %s (%s)", method, path, name)
