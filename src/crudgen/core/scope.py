"""Query predicates derived from the request scope of a (possibly nested) resource."""

from __future__ import annotations

from typing import Any

from crudgen.core.context import RequestContext
from crudgen.core.naming import to_internal
from crudgen.core.schema import ScopeFn


def list_predicate(context: RequestContext, scope: ScopeFn | None) -> dict[str, Any]:
    if scope is None:
        return {}
    return to_internal(scope(context))


def item_predicate(context: RequestContext, scope: ScopeFn | None) -> dict[str, Any]:
    return {**list_predicate(context, scope), "id": context.params.get("id")}


def filter_predicate(context: RequestContext, scope: ScopeFn | None) -> dict[str, Any]:
    """List predicate extended with equality filters taken from the query string.

    Scope values always win over a query parameter of the same name.
    """
    return {**to_internal(context.query), **list_predicate(context, scope)}
