from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"


class ResourceLink(BaseModel):
    name: str
    path: str


class RootResponse(BaseModel):
    title: str
    version: str
    resources: list[ResourceLink]
