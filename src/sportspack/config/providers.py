"""Credentials for the remote event providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .env import optional_env_var

if TYPE_CHECKING:
    from collections.abc import Mapping

STATSPERFORM_ENV_VARS: tuple[str, ...] = ("STATSPERFORM_API_KEY",)
HEIMSPIEL_ENV_VARS: tuple[str, ...] = ("HEIMSPIEL_API_KEY", "HEIMSPIEL_CLIENT_ID")


def _read_credentials(names: tuple[str, ...]) -> dict[str, str]:
    credentials: dict[str, str] = {}
    for name in names:
        value = optional_env_var(name)
        if value is not None:
            credentials[name.lower()] = value
    return credentials


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Per-provider credential maps; an empty map means "not configured"."""

    statsperform: Mapping[str, str] = field(default_factory=dict[str, str])
    heimspiel: Mapping[str, str] = field(default_factory=dict[str, str])

    def credentials_for(self, name: str) -> Mapping[str, str]:
        if name == "statsperform":
            return self.statsperform
        if name == "heimspiel":
            return self.heimspiel
        return {}


def get_provider_config() -> ProviderConfig:
    """Missing credentials are not an error; providers just report unconfigured."""

    return ProviderConfig(
        statsperform=_read_credentials(STATSPERFORM_ENV_VARS),
        heimspiel=_read_credentials(HEIMSPIEL_ENV_VARS),
    )
