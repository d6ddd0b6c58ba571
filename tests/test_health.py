"""Tests for GET /health."""


def test_health_returns_ok(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["provider"] == "memory"


def test_health_counts_sessions(client, provider):
    provider.init("a")
    provider.init("b")
    # The health request itself starts a session too.
    assert client.get("/health").json()["sessions"] == 3


def test_health_without_len(test_settings):
    from fastapi.testclient import TestClient

    from sessionmanager.main import create_app
    from sessionmanager.session import MemoryProvider, ProviderRegistry

    class OpaqueProvider:
        def __init__(self):
            self._inner = MemoryProvider()

        def init(self, session_id):
            return self._inner.init(session_id)

        def read(self, session_id):
            return self._inner.read(session_id)

        def destroy(self, session_id):
            self._inner.destroy(session_id)

        def gc(self, max_lifetime):
            return self._inner.gc(max_lifetime)

    registry = ProviderRegistry()
    registry.register("opaque", OpaqueProvider())
    test_settings.session_provider = "opaque"
    client = TestClient(create_app(settings=test_settings, registry=registry))

    data = client.get("/health").json()
    assert data["provider"] == "opaque"
    assert "sessions" not in data
