import pytest
from fastapi.testclient import TestClient

from app import main
from app.core.startup_checks import ensure_migrations_applied, validate_database_environment


def test_app_registers_core_routes(monkeypatch):
    monkeypatch.setattr(main, "_startup_tasks", lambda: None)

    paths = {getattr(route, "path", None) for route in main.app.routes}

    for expected in (
        "/api/register",
        "/api/login",
        "/api/logout",
        "/api/auth/user",
        "/api/companies",
        "/api/dashboard/{company_id}/summary",
        "/api/assets",
        "/api/contracts",
        "/api/licenses",
        "/api/maintenance/asset/{asset_id}/{company_id}",
        "/api/technicians/{company_id}",
        "/api/notifications/create-expiry-alerts/{company_id}",
        "/api/admin/support-access/{company_id}",
        "/internal/metrics",
    ):
        assert expected in paths

    with TestClient(main.app) as client:
        assert client.get("/").json() == {"status": "ok"}
        health = client.get("/health")
        assert health.json() == {"status": "healthy"}
        assert health.headers["X-Request-ID"]


def test_request_id_is_propagated(monkeypatch):
    monkeypatch.setattr(main, "_startup_tasks", lambda: None)

    with TestClient(main.app) as client:
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_sqlite_is_rejected_in_production():
    with pytest.raises(RuntimeError):
        validate_database_environment(database_url="sqlite:///./itam.db", is_prod=True)

    validate_database_environment(database_url="postgresql://db/itam", is_prod=True)
    validate_database_environment(database_url="sqlite:///./itam.db", is_prod=False)


def test_migration_check_is_skipped_outside_production(tmp_path):
    # ENV padrão é dev: nem o alembic.ini é lido.
    ensure_migrations_applied(engine=None, alembic_config_path=tmp_path / "ausente.ini")
