"""Session error hierarchy."""

from __future__ import annotations


class SessionError(Exception):
    """Base class for every error raised by the session subsystem."""


class ProviderRegistrationError(SessionError):
    """A provider was registered twice or registered as ``None``.

    This is a wiring mistake in the composition root, not a runtime
    condition; let it abort startup.
    """


class ProviderNotFoundError(SessionError):
    """A manager was requested for a provider name nobody registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"session: unknown provider {name!r} (not registered?)")
        self.name = name


class SessionIdError(SessionError):
    """The secure random source could not produce a session identifier."""


class SessionNotFoundError(SessionError):
    """A client presented a session id the provider does not know."""
