"""Read-only entity store boundary.

The engine reads enterprises, grant edges, management links and entity
ownership through :class:`EntityStore`. Public methods are concrete: they
short-circuit empty scopes, normalise results to frozensets and translate
backend failures into :class:`DataAccessError`. Adapters implement the
``_``-prefixed hooks.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, TypeVar

from .exceptions import DataAccessError, HubPermsError
from .models import Enterprise, EnterpriseRelationship, EntityId, LineItemSupply, User

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

Ids = frozenset[EntityId]


class EntityStore(ABC):
    """Point and filtered-scan reads over the entity store."""

    def _read(self, operation: str, fetch: Callable[..., _T], *args: Any) -> _T:
        try:
            return fetch(*args)
        except HubPermsError:
            raise
        except Exception as e:
            logger.error("Entity store read %s failed: %s", operation, e)
            raise DataAccessError(
                f"Entity store read '{operation}' failed: {e}",
                operation=operation,
            ) from e

    def _scan(self, operation: str, fetch: Callable[[Ids], Iterable[EntityId]], ids: Iterable[EntityId]) -> Ids:
        scope = frozenset(ids)
        if not scope:
            return frozenset()
        return frozenset(self._read(operation, fetch, scope))

    # ── Enterprises & grants ────────────────────────────

    def enterprise_ids(self) -> Ids:
        """Every enterprise id (the universe returned to admins)."""
        return frozenset(self._read("enterprise_ids", self._enterprise_ids))

    def enterprises(self, ids: Iterable[EntityId]) -> list[Enterprise]:
        scope = frozenset(ids)
        if not scope:
            return []
        return list(self._read("enterprises", self._enterprises, scope))

    def managed_enterprise_ids(self, user_id: EntityId) -> Ids:
        """Enterprises the user directly manages."""
        return frozenset(self._read("managed_enterprise_ids", self._managed_enterprise_ids, user_id))

    def relationships_to(self, child_ids: Iterable[EntityId]) -> list[EnterpriseRelationship]:
        """Edges whose grantee is in ``child_ids``."""
        scope = frozenset(child_ids)
        if not scope:
            return []
        return list(self._read("relationships_to", self._relationships_to, scope))

    def relationships_from(self, parent_ids: Iterable[EntityId]) -> list[EnterpriseRelationship]:
        """Edges whose grantor is in ``parent_ids``."""
        scope = frozenset(parent_ids)
        if not scope:
            return []
        return list(self._read("relationships_from", self._relationships_from, scope))

    # ── Dependent entities ──────────────────────────────

    def order_ids_by_distributor(self, ids: Iterable[EntityId]) -> Ids:
        return self._scan("order_ids_by_distributor", self._order_ids_by_distributor, ids)

    def order_ids_by_order_cycle(self, ids: Iterable[EntityId]) -> Ids:
        return self._scan("order_ids_by_order_cycle", self._order_ids_by_order_cycle, ids)

    def line_item_supply(self, order_ids: Iterable[EntityId]) -> list[LineItemSupply]:
        """Line items of the given orders with their resolved supplier."""
        scope = frozenset(order_ids)
        if not scope:
            return []
        return list(self._read("line_item_supply", self._line_item_supply, scope))

    def product_ids_by_supplier(self, ids: Iterable[EntityId]) -> Ids:
        return self._scan("product_ids_by_supplier", self._product_ids_by_supplier, ids)

    def order_cycle_ids_by_coordinator(self, ids: Iterable[EntityId]) -> Ids:
        return self._scan("order_cycle_ids_by_coordinator", self._order_cycle_ids_by_coordinator, ids)

    def accessible_order_cycle_ids(self, user: User) -> Ids:
        """Order cycles the store's own accessibility rule grants ``user``."""
        return frozenset(self._read("accessible_order_cycle_ids", self._accessible_order_cycle_ids, user))

    def schedule_ids_by_order_cycle(self, ids: Iterable[EntityId]) -> Ids:
        return self._scan("schedule_ids_by_order_cycle", self._schedule_ids_by_order_cycle, ids)

    def subscription_ids_by_shop(self, ids: Iterable[EntityId]) -> Ids:
        return self._scan("subscription_ids_by_shop", self._subscription_ids_by_shop, ids)

    # ── Adapter hooks ───────────────────────────────────

    @abstractmethod
    def _enterprise_ids(self) -> Iterable[EntityId]: ...

    @abstractmethod
    def _enterprises(self, ids: Ids) -> Iterable[Enterprise]: ...

    @abstractmethod
    def _managed_enterprise_ids(self, user_id: EntityId) -> Iterable[EntityId]: ...

    @abstractmethod
    def _relationships_to(self, child_ids: Ids) -> Iterable[EnterpriseRelationship]: ...

    @abstractmethod
    def _relationships_from(self, parent_ids: Ids) -> Iterable[EnterpriseRelationship]: ...

    @abstractmethod
    def _order_ids_by_distributor(self, ids: Ids) -> Iterable[EntityId]: ...

    @abstractmethod
    def _order_ids_by_order_cycle(self, ids: Ids) -> Iterable[EntityId]: ...

    @abstractmethod
    def _line_item_supply(self, order_ids: Ids) -> Iterable[LineItemSupply]: ...

    @abstractmethod
    def _product_ids_by_supplier(self, ids: Ids) -> Iterable[EntityId]: ...

    @abstractmethod
    def _order_cycle_ids_by_coordinator(self, ids: Ids) -> Iterable[EntityId]: ...

    @abstractmethod
    def _accessible_order_cycle_ids(self, user: User) -> Iterable[EntityId]: ...

    @abstractmethod
    def _schedule_ids_by_order_cycle(self, ids: Ids) -> Iterable[EntityId]: ...

    @abstractmethod
    def _subscription_ids_by_shop(self, ids: Ids) -> Iterable[EntityId]: ...


__all__ = ["EntityStore", "Ids"]
