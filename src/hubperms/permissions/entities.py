"""Visibility of orders, line items, products, schedules and subscriptions.

Every result derives from the enterprise sets of a :class:`PermissionResolver`
plus the ownership link of each entity type (distributor, supplier,
coordinator, shop). "Editable" sets come from enterprises I manage or order
cycles I coordinate. "Visible" sets add what a producer-side grant chain
reaches, and are always unioned with the editable set.
"""

from __future__ import annotations

from ..constants import PermissionKind
from ..interfaces import Ids
from .resolver import PermissionResolver


class EntityVisibilityQueries:
    """Entity id sets a user may view or edit.

    Shares its resolver's cache, so it must not outlive that resolution.
    """

    __slots__ = ("_resolver",)

    def __init__(self, resolver: PermissionResolver) -> None:
        self._resolver = resolver

    @property
    def resolver(self) -> PermissionResolver:
        return self._resolver

    # ── Producer grant chain ────────────────────────────

    def granted_distributor_ids(self) -> Ids:
        """Distributors a managed primary producer granted ``add_to_order_cycle`` to."""
        r = self._resolver
        return r.cache.get_or_compute(
            ("granted_distributors",),
            lambda: r.graph.grantees_of(PermissionKind.ADD_TO_ORDER_CYCLE, r.managed_primary_producer_ids()),
        )

    def producers_with_associated_orders(self) -> Ids:
        """Managed primary producers that granted ``add_to_order_cycle`` to a granted distributor.

        Orders through those distributors are visible only when they contain
        goods supplied by one of these producers.
        """
        r = self._resolver
        granting = r.graph.grantors_of(PermissionKind.ADD_TO_ORDER_CYCLE, self.granted_distributor_ids())
        return granting & r.managed_primary_producer_ids()

    # ── Orders ──────────────────────────────────────────

    def editable_orders(self) -> Ids:
        """Orders placed through a managed hub or a coordinated order cycle."""
        r = self._resolver

        def compute() -> Ids:
            managed = r.store.order_ids_by_distributor(r.managed_scope())
            coordinated = r.store.order_ids_by_order_cycle(r.coordinated_order_cycle_ids())
            return managed | coordinated

        return r.cache.get_or_compute(("editable_orders",), compute)

    def visible_orders(self) -> Ids:
        """Editable orders, plus orders through a granted distributor containing my producers' goods.

        A grant alone is not enough: the order must hold a line item supplied
        by a managed producer that granted ``add_to_order_cycle``.
        """
        r = self._resolver

        def compute() -> Ids:
            editable = self.editable_orders()
            candidates = r.store.order_ids_by_distributor(self.granted_distributor_ids())
            suppliers = self.producers_with_associated_orders()
            produced = frozenset(
                supply.order_id
                for supply in r.store.line_item_supply(candidates)
                if supply.supplier_id is not None and supply.supplier_id in suppliers
            )
            return editable | produced

        return r.cache.get_or_compute(("visible_orders",), compute)

    # ── Line items ──────────────────────────────────────

    def editable_line_items(self) -> Ids:
        r = self._resolver
        return frozenset(supply.line_item_id for supply in r.store.line_item_supply(self.editable_orders()))

    def visible_line_items(self) -> Ids:
        """Editable line items, plus those of visible orders supplied by a managed primary producer."""
        r = self._resolver
        producers = r.managed_primary_producer_ids()
        produced = frozenset(
            supply.line_item_id
            for supply in r.store.line_item_supply(self.visible_orders())
            if supply.supplier_id is not None and supply.supplier_id in producers
        )
        return self.editable_line_items() | produced

    # ── Products ────────────────────────────────────────

    def editable_products(self) -> Ids:
        r = self._resolver
        suppliers = r.managed_scope()
        if not r.is_admin:
            suppliers = suppliers | r.granting_to(PermissionKind.MANAGE_PRODUCTS)
        return r.store.product_ids_by_supplier(suppliers)

    def visible_products(self) -> Ids:
        r = self._resolver
        suppliers = r.managed_scope()
        if not r.is_admin:
            suppliers = (
                suppliers
                | r.granting_to(PermissionKind.MANAGE_PRODUCTS)
                | r.granting_to(PermissionKind.ADD_TO_ORDER_CYCLE)
            )
        return r.store.product_ids_by_supplier(suppliers)

    # ── Schedules ───────────────────────────────────────

    def editable_schedules(self) -> Ids:
        r = self._resolver
        return r.store.schedule_ids_by_order_cycle(r.coordinated_order_cycle_ids())

    def visible_schedules(self) -> Ids:
        """Schedules with an order cycle the store considers accessible to the user."""
        r = self._resolver
        accessible = r.cache.get_or_compute(
            ("accessible_order_cycles",),
            lambda: r.store.accessible_order_cycle_ids(r.user),
        )
        return r.store.schedule_ids_by_order_cycle(accessible)

    # ── Subscriptions ───────────────────────────────────

    def editable_subscriptions(self) -> Ids:
        r = self._resolver
        return r.store.subscription_ids_by_shop(r.managed_scope())

    def visible_subscriptions(self) -> Ids:
        # Same as editable: no grant extends subscription visibility yet.
        return self.editable_subscriptions()


__all__ = ["EntityVisibilityQueries"]
