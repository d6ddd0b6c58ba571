"""Session manager: binds provider sessions to HTTP cookies.

The manager reads the session cookie from a request, asks its provider to
create or load the matching session, and writes the cookie back on the
response when a new session was issued. A ``GarbageCollector`` thread
periodically asks the provider to drop idle sessions.
"""

from __future__ import annotations

import enum
import logging
import threading
from urllib.parse import quote_plus, unquote_plus

from itsdangerous import BadSignature, URLSafeTimedSerializer
from starlette.requests import HTTPConnection
from starlette.responses import Response

from .. import audit
from .backend import Provider, Session
from .errors import SessionNotFoundError
from .ids import new_session_id

logger = logging.getLogger(__name__)


class MissingSessionPolicy(str, enum.Enum):
    """What ``Manager.start`` does with a cookie the provider doesn't know."""

    RENEW = "renew"  # issue a fresh id and cookie
    RECREATE = "recreate"  # start an empty session under the presented id
    REJECT = "reject"  # raise SessionNotFoundError


class Manager:
    """Cookie-bound session lifecycle on top of a ``Provider``.

    ``start``, ``destroy`` and ``gc`` are serialised by one lock. The
    provider does its own locking for per-session access.

    Args:
        provider: Storage backend. Fixed for the manager's lifetime.
        cookie_name: Name of the cookie that carries the session id.
        max_lifetime: Seconds of inactivity before a session may be
            collected. Also the cookie Max-Age and the GC interval.
        missing_policy: Handling of unknown ids presented by clients.
        secret: When set, cookie values are signed with itsdangerous and
            tampered or stale cookies are treated as absent.
        https_only: Add the ``Secure`` cookie attribute.
        same_site: ``SameSite`` cookie attribute.
        provider_name: Registry name of the provider, for logs and health.
    """

    def __init__(
        self,
        provider: Provider,
        cookie_name: str,
        max_lifetime: float,
        *,
        missing_policy: MissingSessionPolicy | str = MissingSessionPolicy.RENEW,
        secret: str = "",
        https_only: bool = False,
        same_site: str = "lax",
        provider_name: str = "",
    ) -> None:
        if max_lifetime <= 0:
            raise ValueError("max_lifetime must be positive")
        self.provider = provider
        self.provider_name = provider_name or type(provider).__name__
        self.cookie_name = cookie_name
        self.max_lifetime = max_lifetime
        self.missing_policy = MissingSessionPolicy(missing_policy)
        self.signer = URLSafeTimedSerializer(secret) if secret else None
        self.https_only = https_only
        self.same_site = same_site
        self._lock = threading.Lock()
        self._collector: GarbageCollector | None = None

    # ── Lifecycle ─────────────────────────────────────────────────────────

    def start(self, request: HTTPConnection, response: Response) -> Session:
        """Return the session for ``request``, creating one if needed.

        A Set-Cookie header is added to ``response`` only when a new
        session id was issued.
        """
        with self._lock:
            session_id = self.session_id_from(request)
            if session_id is None:
                return self._create(response)

            session = self.provider.read(session_id)
            if session is not None:
                return session

            if self.missing_policy is MissingSessionPolicy.REJECT:
                audit.session_event(
                    activity=audit.Activity.REJECTED,
                    session_id=session_id,
                    message="Unknown session id rejected",
                )
                raise SessionNotFoundError(f"session {audit.fingerprint(session_id)} not found")
            if self.missing_policy is MissingSessionPolicy.RECREATE:
                audit.session_event(
                    activity=audit.Activity.CREATED,
                    session_id=session_id,
                    message="Session recreated under presented id",
                )
                return self.provider.init(session_id)
            return self._create(response, renewed=True)

    def destroy(self, request: HTTPConnection, response: Response) -> None:
        """Destroy the request's session and expire its cookie.

        Requests without a usable session cookie are left alone.
        """
        session_id = self.session_id_from(request)
        if session_id is None:
            return
        self.invalidate(session_id, response)

    def invalidate(self, session_id: str, response: Response) -> None:
        """Destroy ``session_id`` and expire the cookie on ``response``."""
        with self._lock:
            self.provider.destroy(session_id)
            self.clear_cookie(response)
        audit.session_event(
            activity=audit.Activity.DESTROYED,
            session_id=session_id,
            message="Session destroyed",
        )

    def gc(self) -> int:
        """Run one expiry sweep on the provider."""
        with self._lock:
            removed = self.provider.gc(self.max_lifetime)
        if removed:
            logger.info("Session GC removed %d expired session(s)", removed)
            audit.sweep_event(removed=removed, max_lifetime=self.max_lifetime)
        return removed

    def start_gc(self) -> GarbageCollector:
        """Start the periodic GC worker. Calling it again is a no-op."""
        if self._collector is None or not self._collector.running:
            self._collector = GarbageCollector(self, interval=self.max_lifetime)
            self._collector.start()
        return self._collector

    def stop_gc(self) -> None:
        if self._collector is not None:
            self._collector.stop()
            self._collector = None

    # ── Cookies ───────────────────────────────────────────────────────────

    def session_id_from(self, request: HTTPConnection) -> str | None:
        """Extract the session id from the request cookie, if valid."""
        raw = request.cookies.get(self.cookie_name)
        if not raw:
            return None
        if self.signer is None:
            return unquote_plus(raw) or None
        try:
            return self.signer.loads(raw, max_age=self.max_lifetime)
        except BadSignature:
            return None

    def set_cookie(self, response: Response, session_id: str) -> None:
        if self.signer is None:
            value = quote_plus(session_id)
        else:
            value = self.signer.dumps(session_id)
        response.set_cookie(
            key=self.cookie_name,
            value=value,
            max_age=int(self.max_lifetime),
            path="/",
            secure=self.https_only,
            httponly=True,
            samesite=self.same_site,
        )

    def clear_cookie(self, response: Response) -> None:
        """Tell the client to drop its session cookie immediately."""
        response.set_cookie(
            key=self.cookie_name,
            value="",
            max_age=-1,
            path="/",
            secure=self.https_only,
            httponly=True,
            samesite=self.same_site,
        )

    def _create(self, response: Response, *, renewed: bool = False) -> Session:
        session_id = new_session_id()
        session = self.provider.init(session_id)
        self.set_cookie(response, session_id)
        audit.session_event(
            activity=audit.Activity.RENEWED if renewed else audit.Activity.CREATED,
            session_id=session_id,
            message="Session renewed after unknown id" if renewed else "Session created",
        )
        return session


class GarbageCollector:
    """Background thread that runs ``Manager.gc`` every ``interval`` seconds.

    Sweeps once on start, then waits on a stop event between sweeps so
    ``stop()`` returns promptly instead of sleeping out the interval.
    """

    def __init__(self, manager: Manager, interval: float) -> None:
        self._manager = manager
        self._interval = interval
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="session-gc", daemon=True)
        self._thread.start()
        logger.info("Session GC started (every %ss)", self._interval)

    def stop(self, timeout: float = 5.0) -> None:
        self._stopped.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
            logger.info("Session GC stopped")

    def _run(self) -> None:
        while not self._stopped.is_set():
            try:
                self._manager.gc()
            except Exception:
                logger.exception("Session GC sweep failed")
            self._stopped.wait(self._interval)
