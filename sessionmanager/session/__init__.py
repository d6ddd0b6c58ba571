from .backend import Provider, Session
from .errors import (
    ProviderNotFoundError,
    ProviderRegistrationError,
    SessionError,
    SessionIdError,
    SessionNotFoundError,
)
from .ids import new_session_id
from .manager import GarbageCollector, Manager, MissingSessionPolicy
from .memory import MemoryProvider, MemorySession
from .middleware import SessionMiddleware
from .registry import ProviderRegistry, default_registry

__all__ = [
    "GarbageCollector",
    "Manager",
    "MemoryProvider",
    "MemorySession",
    "MissingSessionPolicy",
    "Provider",
    "ProviderNotFoundError",
    "ProviderRegistrationError",
    "ProviderRegistry",
    "Session",
    "SessionError",
    "SessionIdError",
    "SessionMiddleware",
    "SessionNotFoundError",
    "default_registry",
    "new_session_id",
]
