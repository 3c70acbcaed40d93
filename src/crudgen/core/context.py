"""Per-request context handed to scope functions, guards and ad hoc handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ConnectionInfo:
    scheme: str = "http"
    host: str = "localhost"
    client: str | None = None

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}"


@dataclass
class RequestContext:
    params: dict[str, Any] = field(default_factory=dict)
    payload: Any = None
    query: dict[str, str] = field(default_factory=dict)
    path: str = "/"
    connection: ConnectionInfo = field(default_factory=ConnectionInfo)


class _Blank(dict[str, Any]):
    def __missing__(self, key: str) -> None:
        return None


def probe_context() -> RequestContext:
    """A context whose params and payload answer ``None`` for any key.

    Used at registration to enumerate the keys a scope function derives.
    """
    return RequestContext(params=_Blank(), payload=_Blank(), query=_Blank())
