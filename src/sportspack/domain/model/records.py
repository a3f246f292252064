"""Records produced by remote providers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SyncRecord:
    """One event returned by a provider, consumed immediately by reconciliation."""

    remote_id: str
    title: str
    content: str = ""
