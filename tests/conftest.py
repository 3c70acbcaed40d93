"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from crudgen.api import demo
from crudgen.api.app import create_app
from crudgen.core.options import CrudOptions
from crudgen.core.ports.store import ResourceStore

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def stores() -> dict[str, ResourceStore]:
    return demo.memory_stores()


@pytest.fixture
def options() -> CrudOptions:
    return CrudOptions()


@pytest.fixture
def client(stores: dict[str, ResourceStore], options: CrudOptions) -> TestClient:
    return TestClient(create_app(stores, options))
