"""Snapshot-backed entity store.

``InMemoryEntityStore`` holds immutable entity snapshots and answers every
:class:`EntityStore` read with plain set operations. It suits callers that
already hold the rows a resolution needs (report jobs, fixtures, tests).
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, Field

from .config import PermissionsConfig
from .constants import PermissionKind
from .exceptions import InvalidPermissionKind
from .interfaces import EntityStore, Ids
from .models import (
    Enterprise,
    EnterpriseRelationship,
    EntityId,
    LineItem,
    LineItemSupply,
    Order,
    OrderCycle,
    Product,
    Schedule,
    Subscription,
    User,
    Variant,
)

logger = logging.getLogger(__name__)


class StoreSnapshot(BaseModel):
    """Plain-data form of a store, e.g. loaded from JSON.

    ``managers`` maps a user id to the enterprise ids that user manages.
    """

    model_config = {"extra": "forbid"}

    enterprises: list[Enterprise] = Field(default_factory=list)
    relationships: list[EnterpriseRelationship] = Field(default_factory=list)
    managers: dict[EntityId, list[EntityId]] = Field(default_factory=dict)
    order_cycles: list[OrderCycle] = Field(default_factory=list)
    orders: list[Order] = Field(default_factory=list)
    products: list[Product] = Field(default_factory=list)
    variants: list[Variant] = Field(default_factory=list)
    line_items: list[LineItem] = Field(default_factory=list)
    schedules: list[Schedule] = Field(default_factory=list)
    subscriptions: list[Subscription] = Field(default_factory=list)


def _drop_unknown_tags(relationship: Any) -> Any:
    if not isinstance(relationship, Mapping):
        return relationship
    tags = relationship.get("permissions") or ()
    if isinstance(tags, str):
        tags = (tags,)
    kept = []
    for tag in tags:
        try:
            kept.append(PermissionKind.parse(tag))
        except InvalidPermissionKind:
            logger.warning(
                "Dropping unknown permission tag %r on relationship %s -> %s",
                tag,
                relationship.get("parent_id"),
                relationship.get("child_id"),
            )
    return {**relationship, "permissions": kept}


class InMemoryEntityStore(EntityStore):
    """Entity store over in-process snapshots."""

    def __init__(
        self,
        *,
        enterprises: Iterable[Enterprise] = (),
        relationships: Iterable[EnterpriseRelationship] = (),
        managers: Optional[Mapping[EntityId, Iterable[EntityId]]] = None,
        order_cycles: Iterable[OrderCycle] = (),
        orders: Iterable[Order] = (),
        products: Iterable[Product] = (),
        variants: Iterable[Variant] = (),
        line_items: Iterable[LineItem] = (),
        schedules: Iterable[Schedule] = (),
        subscriptions: Iterable[Subscription] = (),
    ) -> None:
        self._enterprises_by_id = {e.id: e for e in enterprises}
        self._relationships = tuple(relationships)
        self._managers = {user_id: frozenset(ids) for user_id, ids in (managers or {}).items()}
        self._order_cycles = tuple(order_cycles)
        self._orders = tuple(orders)
        self._products_by_id = {p.id: p for p in products}
        self._variants_by_id = {v.id: v for v in variants}
        self._line_items = tuple(line_items)
        self._schedules = tuple(schedules)
        self._subscriptions = tuple(subscriptions)

        self._line_items_by_order: dict[EntityId, list[LineItem]] = defaultdict(list)
        for item in self._line_items:
            self._line_items_by_order[item.order_id].append(item)

    @classmethod
    def from_snapshot(
        cls,
        data: StoreSnapshot | Mapping[str, Any],
        config: Optional[PermissionsConfig] = None,
    ) -> InMemoryEntityStore:
        """Build a store from a :class:`StoreSnapshot` or its plain mapping.

        With ``config.strict_permission_kinds`` false, unknown permission tags
        on stored relationships are logged and dropped. Otherwise they raise
        :class:`InvalidPermissionKind`.
        """
        if not isinstance(data, StoreSnapshot):
            raw = dict(data)
            if config is not None and not config.strict_permission_kinds:
                raw["relationships"] = [_drop_unknown_tags(r) for r in raw.get("relationships", ())]
            data = StoreSnapshot.model_validate(raw)

        return cls(
            enterprises=data.enterprises,
            relationships=data.relationships,
            managers=data.managers,
            order_cycles=data.order_cycles,
            orders=data.orders,
            products=data.products,
            variants=data.variants,
            line_items=data.line_items,
            schedules=data.schedules,
            subscriptions=data.subscriptions,
        )

    # ── Hooks ───────────────────────────────────────────

    def _enterprise_ids(self) -> Iterable[EntityId]:
        return self._enterprises_by_id.keys()

    def _enterprises(self, ids: Ids) -> Iterable[Enterprise]:
        return [self._enterprises_by_id[i] for i in ids if i in self._enterprises_by_id]

    def _managed_enterprise_ids(self, user_id: EntityId) -> Iterable[EntityId]:
        return self._managers.get(user_id, frozenset())

    def _relationships_to(self, child_ids: Ids) -> Iterable[EnterpriseRelationship]:
        return [r for r in self._relationships if r.child_id in child_ids]

    def _relationships_from(self, parent_ids: Ids) -> Iterable[EnterpriseRelationship]:
        return [r for r in self._relationships if r.parent_id in parent_ids]

    def _order_ids_by_distributor(self, ids: Ids) -> Iterable[EntityId]:
        return [o.id for o in self._orders if o.distributor_id in ids]

    def _order_ids_by_order_cycle(self, ids: Ids) -> Iterable[EntityId]:
        return [o.id for o in self._orders if o.order_cycle_id in ids]

    def _supplier_of(self, item: LineItem) -> Optional[EntityId]:
        variant = self._variants_by_id.get(item.variant_id) if item.variant_id is not None else None
        if variant is None or variant.product_id is None:
            return None
        product = self._products_by_id.get(variant.product_id)
        if product is None:
            return None
        return product.supplier_id

    def _line_item_supply(self, order_ids: Ids) -> Iterable[LineItemSupply]:
        return [
            LineItemSupply(line_item_id=item.id, order_id=item.order_id, supplier_id=self._supplier_of(item))
            for order_id in order_ids
            for item in self._line_items_by_order.get(order_id, ())
        ]

    def _product_ids_by_supplier(self, ids: Ids) -> Iterable[EntityId]:
        return [p.id for p in self._products_by_id.values() if p.supplier_id in ids]

    def _order_cycle_ids_by_coordinator(self, ids: Ids) -> Iterable[EntityId]:
        return [oc.id for oc in self._order_cycles if oc.coordinator_id in ids]

    def _accessible_order_cycle_ids(self, user: User) -> Iterable[EntityId]:
        if user.admin:
            return [oc.id for oc in self._order_cycles]
        managed = self._managers.get(user.id, frozenset())
        return [
            oc.id
            for oc in self._order_cycles
            if oc.coordinator_id in managed or oc.supplier_ids & managed or oc.distributor_ids & managed
        ]

    def _schedule_ids_by_order_cycle(self, ids: Ids) -> Iterable[EntityId]:
        return [s.id for s in self._schedules if s.order_cycle_ids & ids]

    def _subscription_ids_by_shop(self, ids: Ids) -> Iterable[EntityId]:
        return [s.id for s in self._subscriptions if s.shop_id in ids]


__all__ = ["InMemoryEntityStore", "StoreSnapshot"]
