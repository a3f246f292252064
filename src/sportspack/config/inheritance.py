"""Inheritance cache settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import positive_float_env_var

DEFAULT_CACHE_TTL_SECONDS: Final[float] = 3600.0


@dataclass(frozen=True, slots=True)
class InheritanceConfig:
    """Holds the time-to-live applied to every resolved attribute value."""

    ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS


def get_inheritance_config() -> InheritanceConfig:
    return InheritanceConfig(
        ttl_seconds=positive_float_env_var(
            "SPORTSPACK_INHERITANCE_TTL",
            DEFAULT_CACHE_TTL_SECONDS,
        )
    )
