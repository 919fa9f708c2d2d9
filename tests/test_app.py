from fastapi.testclient import TestClient
from sqlalchemy import text

from auth.models import AdminActionLog
from database import Database
from main import create_app
from tests.conftest import bearer


def test_options_returns_bare_200(client):
    for path in ["/subscriptions", "/licenses", "/institutions", "/auth/login"]:
        response = client.options(path)
        assert response.status_code == 200, path
        assert response.content == b""


def test_cors_headers_are_permissive(client):
    response = client.get("/institutions", headers={"Origin": "http://localhost:3000"})

    assert response.headers["access-control-allow-origin"] == "*"


def test_cors_preflight(client):
    response = client.options(
        "/subscriptions",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Authorization, Content-Type",
        },
    )

    assert response.status_code == 200
    assert "POST" in response.headers["access-control-allow-methods"]


def test_unsupported_method_returns_405_envelope(client):
    response = client.patch("/subscriptions")

    assert response.status_code == 405
    body = response.json()
    assert body["success"] is False
    assert body["data"] is None


def test_unknown_route_returns_404_envelope(client):
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_health_ok_when_configured(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_missing_secret_reports_unhealthy(settings, database):
    settings.SECRET_KEY = None
    client = TestClient(create_app(settings, database))

    health = client.get("/health")
    assert health.status_code == 503
    assert health.json()["missing"] == ["JWT_SECRET"]

    response = client.get("/subscriptions", headers=bearer("anything"))
    assert response.status_code == 503
    assert response.json()["error"] == "server_config_missing"


def test_missing_database_reports_unhealthy(settings):
    settings.DATABASE_URL = None
    client = TestClient(create_app(settings))

    assert client.get("/health").json()["missing"] == ["DATABASE_URL"]
    assert client.get("/institutions").status_code == 503


def test_startup_creates_schema_when_enabled(settings):
    settings.AUTO_CREATE_SCHEMA = True
    app = create_app(settings, Database("sqlite://"))

    with TestClient(app) as client:
        response = client.get("/institutions")

    assert response.status_code == 200
    assert response.json()["data"]["institutions"] == []


def test_startup_runs_expiration_sweep_and_scheduler(settings, database):
    settings.ENABLE_SCHEDULER = True
    app = create_app(settings, database)

    with TestClient(app):
        assert app.state.scheduler is not None
        assert app.state.scheduler.running

    assert app.state.scheduler is None


def test_admin_lists_users_and_changes_role(client, admin_headers, regular_user, db):
    users = client.get("/admin/users", params={"role": "user"}, headers=admin_headers).json()["data"]["users"]
    assert [u["id"] for u in users] == [regular_user.id]

    response = client.patch(f"/admin/users/{regular_user.id}/role", json={"role": "admin"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"]["role"] == "admin"

    logs = client.get("/admin/logs", headers=admin_headers).json()["data"]["logs"]
    assert len(logs) == 1
    assert regular_user.id in logs[0]["action"]
    assert db.query(AdminActionLog).count() == 1


def test_role_change_rejects_unknown_role(client, admin_headers, regular_user):
    response = client.patch(f"/admin/users/{regular_user.id}/role", json={"role": "owner"}, headers=admin_headers)
    assert response.status_code == 400


def test_role_change_for_unknown_user_returns_404(client, admin_headers):
    response = client.patch("/admin/users/missing/role", json={"role": "admin"}, headers=admin_headers)
    assert response.status_code == 404


def test_data_store_failure_maps_to_generic_500(client, database, user_headers):
    with database.engine.begin() as connection:
        connection.execute(text("DROP TABLE subscriptions"))

    response = client.get("/subscriptions", headers=user_headers)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Internal server error"
    assert "subscriptions" not in body["message"]
