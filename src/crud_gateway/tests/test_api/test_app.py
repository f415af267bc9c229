import pytest
from fastapi.testclient import TestClient

from crud_gateway import main
from crud_gateway.db.storage import SQLAlchemyStorage
from crud_gateway.main import DatabaseUnavailableError, create_app


class FakeEngine:
    def __init__(self):
        self.disposed = False


class TestCreateApp:

    def test_one_router_per_table(self, gateway_settings, fake_storage):
        app = create_app(settings=gateway_settings, storage=fake_storage)

        paths = app.openapi()["paths"]

        for table in ("departments", "employees"):
            assert f"/api/v1/{table}" in paths
            assert f"/api/v1/{table}/{{id}}" in paths

    def test_api_prefix_is_configurable(self, gateway_settings, fake_storage):
        settings = gateway_settings.model_copy(update={"API_PREFIX": "/v2"})

        client = TestClient(create_app(settings=settings, storage=fake_storage))

        assert client.get("/v2/employees").status_code == 200
        assert client.get("/api/v1/employees").status_code == 404

    def test_cors_preflight(self, client):
        resp = client.options(
            "/api/v1/employees",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "PATCH",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert resp.headers["access-control-allow-credentials"] == "true"
        assert "PATCH" in resp.headers["access-control-allow-methods"]

    def test_cors_rejects_other_origins(self, client):
        resp = client.options(
            "/api/v1/employees",
            headers={"Origin": "http://evil.example", "Access-Control-Request-Method": "GET"},
        )

        assert resp.status_code == 400

    def test_request_id_header(self, client):
        assert client.get("/api/v1/employees").headers.get("X-Request-ID")


class TestLifespan:
    """
    Without an injected storage the app owns the database connection.
    """

    def test_connects_and_disconnects(self, monkeypatch, gateway_settings):
        engine = FakeEngine()

        async def fake_connect(settings):
            return engine

        async def fake_disconnect(e):
            e.disposed = True

        monkeypatch.setattr(main, "connect_to_db", fake_connect)
        monkeypatch.setattr(main, "disconnect_from_db", fake_disconnect)

        app = create_app(settings=gateway_settings)
        with TestClient(app):
            assert isinstance(app.state.storage, SQLAlchemyStorage)
            assert app.state.storage.engine is engine
            assert not engine.disposed

        assert engine.disposed

    def test_unreachable_database_stops_startup(self, monkeypatch, gateway_settings):
        async def fake_connect(settings):
            return None

        monkeypatch.setattr(main, "connect_to_db", fake_connect)

        with pytest.raises(DatabaseUnavailableError):
            with TestClient(create_app(settings=gateway_settings)):
                pass
