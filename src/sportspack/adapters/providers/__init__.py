"""Public interface for the bundled event providers."""

from __future__ import annotations

from .base import HookedProvider
from .heimspiel import HeimspielProvider
from .registry import PROVIDER_CLASSES, build_default_registry
from .schema import EventPayload
from .statsperform import StatsPerformProvider

__all__ = [
    "PROVIDER_CLASSES",
    "EventPayload",
    "HeimspielProvider",
    "HookedProvider",
    "StatsPerformProvider",
    "build_default_registry",
]
