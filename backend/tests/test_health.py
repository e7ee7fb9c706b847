from __future__ import annotations

from fastapi.testclient import TestClient

from plusgrid.core.settings import Settings, get_settings


def test_healthz(client: TestClient) -> None:
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_readyz_with_canonical_format(client: TestClient) -> None:
    r = client.get("/readyz")
    assert r.status_code == 200, r.text
    assert r.json() == {"status": "ready"}


def test_readyz_reports_unusable_format(client: TestClient) -> None:
    client.app.dependency_overrides[get_settings] = lambda: Settings(
        separator="C"
    )
    r = client.get("/readyz")
    assert r.status_code == 503
    assert r.json() == {"status": "not_ready"}


def test_readyz_reports_unusable_default_length(client: TestClient) -> None:
    client.app.dependency_overrides[get_settings] = lambda: Settings(
        default_code_length=5
    )
    r = client.get("/readyz")
    assert r.status_code == 503
    assert r.json() == {"status": "not_ready"}
