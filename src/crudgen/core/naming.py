"""Bidirectional attribute-name translation between camelCase and snake_case."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_CAMELIZE_RE = re.compile(r"(-|_|\.|\s)+(.)?")
_UNDERSCORE_BOUNDARY_RE = re.compile(r"([a-z\d])([A-Z]+)")
_UNDERSCORE_SEPARATOR_RE = re.compile(r"-|\s+")


def camelize(name: str) -> str:
    """``customer_id`` -> ``customerId``. Runs of ``-``, ``_``, ``.`` and whitespace collapse.

    Names that already carry lowercase letters keep their inner capitals, so
    ``customerId`` stays ``customerId``.
    """
    if not any(c.islower() for c in name):
        name = name.lower()
    camel = _CAMELIZE_RE.sub(lambda m: m.group(2).upper() if m.group(2) else "", name)
    return camel[:1].lower() + camel[1:]


def underscore(name: str) -> str:
    """``customerId`` -> ``customer_id``."""
    snake = _UNDERSCORE_BOUNDARY_RE.sub(r"\1_\2", name)
    return _UNDERSCORE_SEPARATOR_RE.sub("_", snake).lower()


def to_internal(attrs: Mapping[str, Any]) -> dict[str, Any]:
    return {underscore(k): v for k, v in attrs.items()}


def to_external(attrs: Mapping[str, Any]) -> dict[str, Any]:
    return {camelize(k): v for k, v in attrs.items()}
