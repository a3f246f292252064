"""Synchronization defaults for provider event syncs."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SYNC_DAYS = 30


@dataclass(frozen=True, slots=True)
class SyncConfig:
    days: int = DEFAULT_SYNC_DAYS


def get_sync_config() -> SyncConfig:
    return SyncConfig()
