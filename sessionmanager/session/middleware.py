"""ASGI session middleware.

Runs ``Manager.start`` before the app, exposes the session as
``request.state.session``, and adds the manager's Set-Cookie header to the
response. Handlers end a session by setting
``request.state.session_destroyed = True``.

Manager calls run in Starlette's threadpool so a slow provider or a GC
sweep holding the manager lock never blocks the event loop. Only HTTP
scopes get a session; websocket connects can't receive the cookie.
"""

from __future__ import annotations

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .errors import SessionNotFoundError
from .manager import Manager


def _set_cookie_headers(response: Response) -> list[str]:
    return [
        value.decode("latin-1")
        for key, value in response.raw_headers
        if key == b"set-cookie"
    ]


class SessionMiddleware:
    """ASGI middleware for server-side sessions backed by a ``Manager``."""

    def __init__(self, app: ASGIApp, manager: Manager) -> None:
        self.app = app
        self.manager = manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        conn = HTTPConnection(scope)
        # Collects the Set-Cookie header the manager writes on creation.
        pending = Response()
        try:
            session = await run_in_threadpool(self.manager.start, conn, pending)
        except SessionNotFoundError:
            response = JSONResponse({"error": "Session not found"}, status_code=401)
            self.manager.clear_cookie(response)
            await response(scope, receive, send)
            return

        scope["state"] = scope.get("state", {})
        scope["state"]["session"] = session
        scope["state"]["session_destroyed"] = False

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                if scope["state"].get("session_destroyed", False):
                    cleared = Response()
                    await run_in_threadpool(self.manager.invalidate, session.id, cleared)
                    cookies = _set_cookie_headers(cleared)
                else:
                    cookies = _set_cookie_headers(pending)
                for cookie in cookies:
                    headers.append("set-cookie", cookie)

            await send(message)

        await self.app(scope, receive, send_wrapper)
