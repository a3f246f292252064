"""Default provider registry wiring."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from sportspack.config.providers import ProviderConfig, get_provider_config
from sportspack.domain.ports.fetching import no_events
from sportspack.domain.providers import ProviderRegistry

from .heimspiel import HeimspielProvider
from .statsperform import StatsPerformProvider

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sportspack.domain.ports.fetching import EventFetchHook

    from .base import HookedProvider

PROVIDER_CLASSES: tuple[type[HookedProvider], ...] = (StatsPerformProvider, HeimspielProvider)


def build_default_registry(
    config: ProviderConfig | None = None,
    *,
    hooks: Mapping[str, EventFetchHook] | None = None,
) -> ProviderRegistry:
    """Register the bundled providers with credentials and optional fetch hooks."""

    provider_config = config or get_provider_config()
    hook_map = dict(hooks or {})
    unknown = set(hook_map) - {provider_cls.NAME for provider_cls in PROVIDER_CLASSES}
    if unknown:
        raise ValueError(f"Fetch hooks given for unknown providers: {', '.join(sorted(unknown))}")

    registry = ProviderRegistry()
    for provider_cls in PROVIDER_CLASSES:
        registry.register(
            provider_cls.NAME,
            partial(
                provider_cls,
                credentials=provider_config.credentials_for(provider_cls.NAME),
                fetch_hook=hook_map.get(provider_cls.NAME, no_events),
            ),
        )
    return registry
