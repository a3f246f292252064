"""StatsPerform event provider."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .base import HookedProvider


@dataclass(slots=True)
class StatsPerformProvider(HookedProvider):
    """StatsPerform feed. No HTTP client is wired; supply ``fetch_hook`` to feed events."""

    NAME: ClassVar[str] = "statsperform"
