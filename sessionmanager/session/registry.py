"""Provider registry: maps backend names to provider instances.

Built once by the composition root (see ``sessionmanager.main``) and
consulted when a ``Manager`` is constructed::

    registry = ProviderRegistry()
    registry.register("memory", MemoryProvider())
    manager = registry.new_manager("memory", "session_id", 3600)
"""

from __future__ import annotations

import logging
from typing import Any

from .backend import Provider
from .errors import ProviderNotFoundError, ProviderRegistrationError
from .manager import Manager
from .memory import MemoryProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    def __init__(self) -> None:
        self._providers: dict[str, Provider] = {}

    def register(self, name: str, provider: Provider | None) -> None:
        """Make ``provider`` available under ``name``.

        Raises ``ProviderRegistrationError`` if ``provider`` is None or the
        name is already taken.
        """
        if provider is None:
            raise ProviderRegistrationError("session: register provider is None")
        if name in self._providers:
            raise ProviderRegistrationError(
                f"session: register called twice for provider {name!r}"
            )
        self._providers[name] = provider
        logger.debug("Registered session provider %r (%s)", name, type(provider).__name__)

    def get(self, name: str) -> Provider:
        try:
            return self._providers[name]
        except KeyError:
            raise ProviderNotFoundError(name) from None

    def new_manager(
        self,
        name: str,
        cookie_name: str,
        max_lifetime: float,
        **options: Any,
    ) -> Manager:
        """Build a ``Manager`` bound to the provider registered as ``name``.

        Extra keyword arguments are passed through to ``Manager``.
        """
        return Manager(
            self.get(name),
            cookie_name=cookie_name,
            max_lifetime=max_lifetime,
            provider_name=name,
            **options,
        )

    def names(self) -> list[str]:
        return sorted(self._providers)

    def __contains__(self, name: object) -> bool:
        return name in self._providers


def default_registry() -> ProviderRegistry:
    """Registry with the built-in ``memory`` provider."""
    registry = ProviderRegistry()
    registry.register("memory", MemoryProvider())
    return registry
