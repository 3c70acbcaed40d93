from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class CrudOptions:
    return_exception_body: bool = True
    allow_delete_all: bool = True
    allow_filters: bool = True

    @classmethod
    def from_env(cls) -> CrudOptions:
        return cls(
            return_exception_body=_env_flag("CRUDGEN_RETURN_EXCEPTION_BODY", True),
            allow_delete_all=_env_flag("CRUDGEN_ALLOW_DELETE_ALL", True),
            allow_filters=_env_flag("CRUDGEN_ALLOW_FILTERS", True),
        )
