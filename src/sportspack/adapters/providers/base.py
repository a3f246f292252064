"""Shared behaviour for providers backed by an injectable fetch hook."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar

from pydantic import ValidationError

from sportspack.domain.errors import ProviderPayloadError
from sportspack.domain.ports.fetching import EventFetchHook, no_events

from .schema import EventPayload

if TYPE_CHECKING:
    from sportspack.domain.model import SyncRecord

log = getLogger(__name__)


@dataclass(slots=True)
class HookedProvider:
    """Provider whose transport is a constructor-supplied fetch function.

    The default hook returns no events, so an unwired provider syncs nothing
    instead of reaching out to the network.
    """

    NAME: ClassVar[str]

    credentials: Mapping[str, str] = field(default_factory=dict[str, str])
    fetch_hook: EventFetchHook = no_events

    def get_name(self) -> str:
        return self.NAME

    def is_configured(self) -> bool:
        return any(value.strip() for value in self.credentials.values())

    def fetch_events(self, remote_id: str, days: int = 30) -> list[SyncRecord]:
        if days < 1:
            raise ValueError("Lookahead window must be at least one day")
        if not self.is_configured():
            log.debug("%s has no credentials configured", self.NAME)

        log.info("Fetching %s events for %s (next %d days)", self.NAME, remote_id, days)
        payloads = list(self.fetch_hook(remote_id, days))
        return [self._parse(payload, index) for index, payload in enumerate(payloads)]

    def _parse(self, payload: object, index: int) -> SyncRecord:
        if not isinstance(payload, Mapping):
            raise ProviderPayloadError(
                self.NAME,
                f"expected a mapping, got {type(payload).__name__}",
                index=index,
            )
        try:
            return EventPayload.model_validate(payload).to_record()
        except ValidationError as exc:
            raise ProviderPayloadError(self.NAME, str(exc), index=index) from exc
