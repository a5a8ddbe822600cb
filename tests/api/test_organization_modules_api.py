"""组织模块与模块目录 HTTP 接口测试"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bizcore.api import catalog_router, organization_modules_router
from bizcore.core.exceptions import ExceptionHandlers
from bizcore.core.modules import ModuleRegistry
from bizcore.database import get_db

BASE = "/api/organizations/org1/modules"


@pytest.fixture
def client(registry: ModuleRegistry, db_session: Session) -> Iterator[TestClient]:
    app = FastAPI()
    ExceptionHandlers.register(app)
    app.include_router(catalog_router)
    app.include_router(organization_modules_router)
    app.state.module_registry = registry
    app.dependency_overrides[get_db] = lambda: db_session

    with TestClient(app) as test_client:
        yield test_client


def test_catalog_endpoint(client: TestClient) -> None:
    response = client.get("/api/modules/catalog")

    assert response.status_code == 200
    data = response.json()
    assert [m["key"] for m in data["modules"]] == [
        "auth",
        "outbox",
        "inventory",
        "pos",
        "reports",
        "purchases",
    ]
    assert data["suites"]["sales"] == ["pos"]
    assert data["validation"] == {"cycles": [], "missing_dependencies": {}}


def test_install_then_list(client: TestClient) -> None:
    response = client.post(f"{BASE}/install", json={"keys": ["pos"]})

    assert response.status_code == 200
    data = response.json()
    assert data["installed_keys"] == ["inventory", "pos"]
    assert data["skipped_system_keys"] == ["auth"]
    assert data["persisted"] is True

    installed = client.get(f"{BASE}/installed").json()
    assert [i["key"] for i in installed] == ["auth", "outbox", "inventory", "pos"]

    view = client.get(BASE).json()
    assert {i["key"] for i in view["available"] if i["installed"]} == {"inventory", "pos"}


def test_uninstall_reports_blockers(client: TestClient) -> None:
    client.post(f"{BASE}/install", json={"keys": ["pos"]})

    data = client.post(f"{BASE}/uninstall", json={"keys": ["inventory"]}).json()

    assert data["blockers"] == ["inventory"]
    assert data["blocked_by"] == {"inventory": ["pos"]}


def test_suite_install(client: TestClient) -> None:
    data = client.post(f"{BASE}/suites/ops/install").json()

    assert data["suite"] == "ops"
    assert data["action"] == "install"
    assert data["installed"] == ["inventory", "reports", "purchases"]


def test_available_sorted(client: TestClient) -> None:
    data = client.get(f"{BASE}/available").json()

    assert [i["key"] for i in data] == ["pos", "inventory", "purchases", "reports"]


def test_configure_module(client: TestClient) -> None:
    client.post(f"{BASE}/install", json={"keys": ["pos"]})

    response = client.put(
        f"{BASE}/pos/config",
        json={"config": {"registerName": "Main"}, "configured_by": "alice"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "configured"
    assert data["configured_by"] == "alice"


def test_configure_unknown_module_returns_404(client: TestClient) -> None:
    response = client.put(f"{BASE}/ghost/config", json={"config": {}})

    assert response.status_code == 404
    assert response.json()["error"]["type"] == "not_found"


def test_configure_not_installed_returns_400(client: TestClient) -> None:
    response = client.put(f"{BASE}/reports/config", json={"config": {}})

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "invalid_request"


def test_set_enabled_modules(client: TestClient) -> None:
    client.post(f"{BASE}/install", json={"keys": ["pos", "reports"]})

    response = client.put(BASE, json={"keys": ["reports"]})

    assert response.status_code == 200
    data = response.json()
    assert data["uninstalled_keys"] == ["inventory", "pos"]
    assert data["already_installed_keys"] == ["reports"]
    assert data["persisted"] is True

    installed = client.get(f"{BASE}/installed").json()
    assert [i["key"] for i in installed] == ["auth", "outbox", "reports"]


def test_set_enabled_modules_unknown_key_changes_nothing(client: TestClient) -> None:
    client.post(f"{BASE}/install", json={"keys": ["inventory"]})

    data = client.put(BASE, json={"keys": ["ghost"]}).json()

    assert data["errors"] == ["Unknown module key: ghost"]
    assert data["uninstalled_keys"] == []
    installed = client.get(f"{BASE}/installed").json()
    assert "inventory" in [i["key"] for i in installed]
