"""Shared fixtures for the session manager test suite."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from sessionmanager.config import Settings, override_settings
from sessionmanager.main import create_app
from sessionmanager.session import MemoryProvider, ProviderRegistry


class FakeClock:
    """Manually advanced stand-in for ``time.time``."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ── Store ─────────────────────────────────────────────────────────────────

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def provider(clock) -> MemoryProvider:
    return MemoryProvider(clock=clock)


@pytest.fixture
def registry(provider) -> ProviderRegistry:
    registry = ProviderRegistry()
    registry.register("memory", provider)
    return registry


# ── Test Settings ─────────────────────────────────────────────────────────

@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        session_provider="memory",
        session_cookie_name="session_id",
        session_max_lifetime=3600,
        session_gc_enabled=False,
    )


# ── App & Client ──────────────────────────────────────────────────────────

@pytest.fixture
def app(test_settings, registry):
    override_settings(test_settings)
    return create_app(settings=test_settings, registry=registry)


@pytest.fixture
def client(app) -> TestClient:
    """TestClient with cookie persistence."""
    return TestClient(app, cookies={})
