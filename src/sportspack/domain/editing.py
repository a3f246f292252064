"""Node editing commands.

Every command that changes stored attributes ends by invalidating the
inheritance cache for the touched node, which also covers its descendants.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sportspack.domain.errors import NodeNotFoundError
from sportspack.domain.inheritance import InheritanceResolver
from sportspack.domain.model import Attribute, sanitize_provider

if TYPE_CHECKING:
    from uuid import UUID

    from sportspack.domain.cache import ResolutionCache
    from sportspack.domain.ports.unit_of_work import TreeUnitOfWork

log = getLogger(__name__)


def clean_attributes(
    *,
    logo: str | None = None,
    remote_provider: str | None = None,
    remote_id: str | None = None,
) -> dict[Attribute, str]:
    """Strip the given values; unknown provider names are stored as unset."""

    values: dict[Attribute, str] = {}
    if logo is not None:
        values[Attribute.LOGO] = logo.strip()
    if remote_provider is not None:
        sanitized = sanitize_provider(remote_provider)
        if remote_provider.strip() and not sanitized:
            log.warning("Ignoring unknown provider %r", remote_provider)
        values[Attribute.REMOTE_PROVIDER] = sanitized
    if remote_id is not None:
        values[Attribute.REMOTE_ID] = remote_id.strip()
    return values


def create_container(
    uow: TreeUnitOfWork,
    *,
    title: str,
    parent_id: UUID | None = None,
    content: str = "",
    logo: str | None = None,
    remote_provider: str | None = None,
    remote_id: str | None = None,
) -> UUID:
    """Create and commit a container, optionally below an existing container."""

    store = uow.repositories.nodes
    if parent_id is not None:
        parent = store.get_node(parent_id)
        if parent is None or not parent.is_container:
            raise NodeNotFoundError(parent_id)

    node_id = store.create_node(
        parent_id,
        title=title.strip(),
        content=content,
        attributes=clean_attributes(
            logo=logo,
            remote_provider=remote_provider,
            remote_id=remote_id,
        ),
    )
    uow.commit()
    log.debug("Created container %s under %s", node_id, parent_id)
    return node_id


def update_node_attributes(
    uow: TreeUnitOfWork,
    cache: ResolutionCache,
    node_id: UUID,
    *,
    title: str | None = None,
    logo: str | None = None,
    remote_provider: str | None = None,
    remote_id: str | None = None,
) -> dict[Attribute, str]:
    """Write the given fields (``None`` leaves a field as is), commit, then invalidate."""

    store = uow.repositories.nodes
    if store.get_node(node_id) is None:
        raise NodeNotFoundError(node_id)

    values = clean_attributes(logo=logo, remote_provider=remote_provider, remote_id=remote_id)
    store.update_node(
        node_id,
        title=title.strip() if title is not None else None,
        attributes=values,
    )
    uow.commit()
    InheritanceResolver(store=store, cache=cache).invalidate(node_id)
    return values
