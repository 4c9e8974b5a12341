"""Per-request resolution lifetime.

``open_resolution()`` builds a resolver and entity queries that share one
private cache, and clears that cache when the request is done::

    with open_resolution(user, store) as resolution:
        hubs = resolution.enterprises.visible_enterprises()
        orders = resolution.entities.visible_orders()
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional
from uuid import uuid4

from ..config import PermissionsConfig
from ..interfaces import EntityStore
from ..logging import get_resolution_logger
from ..models import User
from .entities import EntityVisibilityQueries
from .resolver import PermissionResolver, ResolutionCache


@dataclass(frozen=True)
class Resolution:
    """Enterprise and entity queries for one user request."""

    enterprises: PermissionResolver
    entities: EntityVisibilityQueries

    @property
    def user(self) -> User:
        return self.enterprises.user

    @property
    def cache(self) -> ResolutionCache:
        return self.enterprises.cache

    @property
    def resolution_id(self) -> str:
        return self.enterprises.resolution_id


def build_resolution(
    user: User,
    store: EntityStore,
    config: Optional[PermissionsConfig] = None,
) -> Resolution:
    config = config or PermissionsConfig()
    resolver = PermissionResolver(
        user,
        store,
        config=config,
        cache=ResolutionCache(enabled=config.memoize),
        resolution_id=uuid4().hex,
    )
    return Resolution(enterprises=resolver, entities=EntityVisibilityQueries(resolver))


@contextmanager
def open_resolution(
    user: User,
    store: EntityStore,
    config: Optional[PermissionsConfig] = None,
) -> Iterator[Resolution]:
    """Open a resolution for ``user``; its cache is discarded on exit."""
    resolution = build_resolution(user, store, config)
    log = get_resolution_logger(__name__, user_id=user.id, resolution_id=resolution.resolution_id)
    log.debug("Resolution opened (admin=%s)", user.admin)
    try:
        yield resolution
    finally:
        cache = resolution.cache
        log.debug("Resolution closed: %d cache hits, %d misses", cache.hits, cache.misses)
        cache.clear()


__all__ = [
    "Resolution",
    "build_resolution",
    "open_resolution",
]
