"""Session and provider contracts.

A *provider* is the storage backend behind a ``Manager``. Anything with
these four methods can be registered; the in-memory provider in
``memory.py`` is the reference implementation.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Session(Protocol):
    """Per-client key/value state handed to application code.

    Every call counts as activity and moves the session to the
    most-recently-used end of its provider's eviction order.
    """

    @property
    def id(self) -> str:
        """The immutable session identifier."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value under ``key``, or ``default`` if unset."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``. Missing keys are ignored."""
        ...

    def keys(self) -> list[str]:
        """Return the keys currently set."""
        ...


@runtime_checkable
class Provider(Protocol):
    """Protocol for server-side session storage."""

    def init(self, session_id: str) -> Session:
        """Create an empty session under ``session_id`` and return it."""
        ...

    def read(self, session_id: str) -> Session | None:
        """Return the live session for ``session_id``, or None if unknown."""
        ...

    def destroy(self, session_id: str) -> None:
        """Delete a session. Unknown ids are ignored."""
        ...

    def gc(self, max_lifetime: float) -> int:
        """Drop sessions idle longer than ``max_lifetime`` seconds.

        Returns the number of sessions removed.
        """
        ...
