"""Session identifier generation."""

from __future__ import annotations

import secrets

from .errors import SessionIdError

SESSION_ID_BYTES = 32  # 256 bits


def new_session_id(nbytes: int = SESSION_ID_BYTES) -> str:
    """Return an unguessable, cookie-safe session identifier.

    Reads ``nbytes`` from the OS CSPRNG and encodes them as unpadded
    URL-safe base64. Raises ``SessionIdError`` rather than ever returning a
    short or empty token.
    """
    if nbytes < SESSION_ID_BYTES:
        raise ValueError(f"session ids need at least {SESSION_ID_BYTES} random bytes")
    try:
        return secrets.token_urlsafe(nbytes)
    except (OSError, NotImplementedError) as e:
        raise SessionIdError("secure random source unavailable") from e
