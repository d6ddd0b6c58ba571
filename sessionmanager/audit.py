"""Structured session lifecycle events.

Events are logged to the ``sessionmanager.audit`` logger as JSON; consumers
attach their own handlers (JSON formatter, log shipper, etc.). Session ids
are never logged verbatim, only a short SHA-256 fingerprint.

Usage::

    from sessionmanager import audit
    audit.session_event(
        activity=audit.Activity.CREATED,
        session_id=session.id,
        message="Session created",
    )
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from typing import Any

logger = logging.getLogger("sessionmanager.audit")


class Activity:
    CREATED = "created"
    RENEWED = "renewed"
    REJECTED = "rejected"
    DESTROYED = "destroyed"
    EXPIRED = "expired"


class Severity:
    INFORMATIONAL = 1


_SEVERITY_NAMES = {
    Severity.INFORMATIONAL: "Informational",
}

_PRODUCT = {
    "name": "sessionmanager",
    "version": "0.1.0",
}


def fingerprint(session_id: str) -> str:
    """Short, non-reversible tag for correlating a session across log lines."""
    return hashlib.sha256(session_id.encode()).hexdigest()[:12]


def emit(event: dict[str, Any]) -> None:
    """Log an event as a single JSON line."""
    logger.info(json.dumps(event, default=str))


def session_event(
    *,
    activity: str,
    session_id: str,
    message: str = "",
) -> None:
    """Emit a lifecycle event for one session."""
    emit(
        {
            "activity": activity,
            "severity_id": Severity.INFORMATIONAL,
            "severity": _SEVERITY_NAMES[Severity.INFORMATIONAL],
            "time": int(time.time() * 1000),
            "metadata": {"product": _PRODUCT},
            "session": {"uid": fingerprint(session_id)},
            "message": message,
        }
    )


def sweep_event(*, removed: int, max_lifetime: float) -> None:
    """Emit a summary event for one garbage-collection sweep."""
    emit(
        {
            "activity": Activity.EXPIRED,
            "severity_id": Severity.INFORMATIONAL,
            "severity": _SEVERITY_NAMES[Severity.INFORMATIONAL],
            "time": int(time.time() * 1000),
            "metadata": {
                "product": _PRODUCT,
                "gc": {"removed": removed, "max_lifetime": max_lifetime},
            },
            "message": f"Expired {removed} idle session(s)",
        }
    )
