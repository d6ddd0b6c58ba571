"""FastAPI dependency injection: session and manager access."""

from __future__ import annotations

from fastapi import Request

from .session import Manager, Session


def get_session(request: Request) -> Session:
    """Get the current session from request state."""
    return request.state.session


def get_manager(request: Request) -> Manager:
    return request.app.state.session_manager


def destroy_session(request: Request) -> None:
    """Mark the session for destruction once the response is sent."""
    request.state.session_destroyed = True
