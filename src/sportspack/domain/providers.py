"""Registry mapping provider names to provider factories."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from sportspack.domain.ports.fetching import EventProvider, EventProviderFactory

log = getLogger(__name__)


class ProviderRegistry:
    """Name-keyed provider factories; new providers register without touching callers."""

    def __init__(self, factories: Mapping[str, EventProviderFactory] | None = None) -> None:
        self._factories: dict[str, EventProviderFactory] = {}
        for name, factory in (factories or {}).items():
            self.register(name, factory)

    def register(
        self,
        name: str,
        factory: EventProviderFactory,
        *,
        replace: bool = False,
    ) -> None:
        key = name.strip()
        if not key:
            raise ValueError("Provider name must not be blank")
        if key in self._factories and not replace:
            raise ValueError(f"Provider already registered: {key}")
        self._factories[key] = factory

    def get(self, name: str) -> EventProvider | None:
        """Instantiate the provider registered as ``name``; ``None`` if unknown."""

        factory = self._factories.get(name.strip())
        if factory is None:
            log.debug("No provider registered as %r", name)
            return None
        return factory()

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._factories))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._factories)
