"""FastAPI application wiring the session manager into an HTTP service.

The app is the composition root: it owns the provider registry, builds the
manager from settings, and runs the GC worker for the app's lifetime.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import Settings, get_settings
from .routes import health, logout, session_ep
from .session import ProviderRegistry, SessionMiddleware, default_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the session GC worker while the app is up."""
    manager = app.state.session_manager
    if app.state.session_gc_enabled:
        manager.start_gc()
    try:
        yield
    finally:
        manager.stop_gc()


def create_app(
    *,
    settings: Settings | None = None,
    registry: ProviderRegistry | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration (default: from environment).
        registry: Provider registry (default: built-in ``memory`` provider).
    """
    s = settings or get_settings()
    registry = registry or default_registry()

    manager = registry.new_manager(
        s.session_provider,
        cookie_name=s.session_cookie_name,
        max_lifetime=s.session_max_lifetime,
        missing_policy=s.session_missing_policy,
        secret=s.session_secret,
        https_only=s.session_https_only,
        same_site=s.session_same_site,
    )
    logger.info(
        "Sessions: provider=%s cookie=%s max_lifetime=%ss",
        manager.provider_name,
        manager.cookie_name,
        manager.max_lifetime,
    )

    app = FastAPI(title="Session Manager", lifespan=lifespan)
    app.state.session_manager = manager
    app.state.session_gc_enabled = s.session_gc_enabled

    app.add_middleware(SessionMiddleware, manager=manager)

    app.include_router(session_ep.router)
    app.include_router(logout.router)
    app.include_router(health.router)

    return app
