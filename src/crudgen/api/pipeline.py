"""Request pipeline shared by every generated and ad hoc operation.

RECEIVED -> NORMALIZE -> GUARD -> VALIDATE -> DISPATCH -> RESPOND, where any
failure turns into a response within the same request.
"""

from __future__ import annotations

import inspect
import json
import logging
import math
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from fastapi import Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.background import BackgroundTask

from crudgen.core.context import ConnectionInfo, RequestContext
from crudgen.core.errors import DomainError, ErrorKind
from crudgen.core.normalize import normalize_payload
from crudgen.core.options import CrudOptions
from crudgen.core.resource import Hook, ResourceHandle
from crudgen.core.transform import error_body, violations_body
from crudgen.core.validation import WHOLE_PAYLOAD, Violation, validate

logger = logging.getLogger(__name__)

Handler = Callable[[RequestContext, ResourceHandle], Awaitable[Any]]
Guard = Callable[[RequestContext], None]


@dataclass(frozen=True)
class RouteSpec:
    resource: ResourceHandle
    handler: Handler
    validate: bool = True
    allowed: bool = True
    guard: Guard | None = None


class _InvalidBody(Exception):
    def __init__(self, raw: bytes) -> None:
        super().__init__("request body is not valid JSON")
        self.raw = raw


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"{text} is out of range")
    return value


async def _read_payload(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
    except ValueError as exc:
        raise _InvalidBody(raw) from exc


async def build_context(request: Request) -> RequestContext:
    client = request.client.host if request.client else None
    return RequestContext(
        params=dict(request.path_params),
        payload=await _read_payload(request),
        query=dict(request.query_params),
        path=request.url.path,
        connection=ConnectionInfo(
            scheme=request.url.scheme,
            host=request.headers.get("host", request.url.netloc),
            client=client,
        ),
    )


def json_response(body: Any, status_code: int = status.HTTP_200_OK, **kwargs: Any) -> JSONResponse:
    return JSONResponse(content=jsonable_encoder(body), status_code=status_code, **kwargs)


def reject(error: DomainError, options: CrudOptions) -> Response:
    if options.return_exception_body:
        return json_response(error_body(error), status.HTTP_400_BAD_REQUEST)
    return Response(status_code=status.HTTP_400_BAD_REQUEST)


def reject_violations(violations: list[Violation]) -> Response:
    return json_response(violations_body(violations), status.HTTP_400_BAD_REQUEST)


async def _observe_hook(hook: Hook, entity: dict[str, Any], label: str) -> None:
    try:
        result = hook(entity)
        if inspect.isawaitable(result):
            await result
    except Exception:
        logger.exception("%s hook failed for entity %s", label, entity.get("id"))


def hook_task(hook: Hook | None, entity: dict[str, Any], label: str) -> BackgroundTask | None:
    """Schedule ``hook`` to run after the response is sent; its failures are only logged."""
    if hook is None:
        return None
    return BackgroundTask(_observe_hook, hook, dict(entity), label)


async def run(spec: RouteSpec, request: Request, options: CrudOptions) -> Response:
    if not spec.allowed:
        return Response(status_code=status.HTTP_403_FORBIDDEN)

    resource = spec.resource
    try:
        context = await build_context(request)
    except _InvalidBody as exc:
        return reject_violations([Violation(WHOLE_PAYLOAD, "json_invalid", exc.raw.decode(errors="replace"), True)])

    if context.payload is not None:
        try:
            normalize_payload(context, resource.fields, resource.scope)
            if spec.guard is not None and isinstance(context.payload, dict):
                spec.guard(context)
        except DomainError as err:
            logger.debug("Guard rejected %s %s: %s", request.method, context.path, err.kind.value)
            return reject(err, options)
        except Exception as exc:
            logger.exception("%s %s failed while normalizing the payload", request.method, context.path)
            return reject(DomainError(ErrorKind.STORAGE_FAILURE, str(exc)), options)

    if spec.validate:
        result = validate(context.payload, resource.payload_model, resource.constraints)
        if not result.ok:
            logger.debug("Validation rejected %s %s: %d violation(s)", request.method, context.path, len(result.violations))
            return reject_violations(result.violations)
        context.payload = result.payload

    try:
        outcome = await spec.handler(context, resource)
    except DomainError as err:
        logger.error("%s %s failed: %s %s", request.method, context.path, err.kind.value, err.message)
        return reject(err, options)
    except Exception as exc:
        logger.exception("%s %s failed with an unexpected storage error", request.method, context.path)
        return reject(DomainError(ErrorKind.STORAGE_FAILURE, str(exc)), options)

    if isinstance(outcome, Response):
        return outcome
    return json_response(outcome)
