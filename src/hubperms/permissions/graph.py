"""Grant graph queries over enterprise relationships.

Provides:
- ``GrantGraph`` — who granted a permission to a scope, and who received
  a permission from a scope.

Edges form a multimap: several edges between one pair are unioned, and an
edge matches a query when the requested kind is in its permission set.
Edges with an empty permission set are logged and skipped.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Iterable, Iterator

from ..constants import PermissionKind
from ..exceptions import EmptyEdgePermissionSet
from ..interfaces import EntityStore, Ids
from ..models import EnterpriseRelationship, EntityId

logger = logging.getLogger(__name__)


class GrantGraph:
    """Read-only view over grantor → grantee edges held by an entity store."""

    __slots__ = ("_store",)

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def grantors_of(self, permission: Any, grantee_scope: Iterable[EntityId]) -> Ids:
        """Enterprises that granted ``permission`` to at least one enterprise in ``grantee_scope``.

        Raises:
            InvalidPermissionKind: ``permission`` is not a known kind.
        """
        kind = PermissionKind.parse(permission)
        edges = self._store.relationships_to(grantee_scope)
        return frozenset(edge.parent_id for edge in _matching(edges, kind))

    def grantees_of(self, permission: Any, grantor_scope: Iterable[EntityId]) -> Ids:
        """Enterprises that received ``permission`` from at least one enterprise in ``grantor_scope``."""
        kind = PermissionKind.parse(permission)
        edges = self._store.relationships_from(grantor_scope)
        return frozenset(edge.child_id for edge in _matching(edges, kind))

    def grantors_per_grantee(self, permission: Any, grantee_scope: Iterable[EntityId]) -> dict[EntityId, Ids]:
        """Like :meth:`grantors_of`, grouped by grantee.

        Grantees without a matching edge are absent from the mapping.
        """
        kind = PermissionKind.parse(permission)
        grouped: dict[EntityId, set[EntityId]] = defaultdict(set)
        for edge in _matching(self._store.relationships_to(grantee_scope), kind):
            grouped[edge.child_id].add(edge.parent_id)
        return {grantee: frozenset(grantors) for grantee, grantors in grouped.items()}


def _matching(edges: Iterable[EnterpriseRelationship], kind: PermissionKind) -> Iterator[EnterpriseRelationship]:
    for edge in edges:
        try:
            permissions = edge.ensure_permissions()
        except EmptyEdgePermissionSet as e:
            logger.warning("Skipping relationship: %s", e.message, extra={"error_code": e.code})
            continue
        if kind in permissions:
            yield edge


__all__ = ["GrantGraph"]
