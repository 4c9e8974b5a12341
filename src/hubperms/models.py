"""Read-only entity snapshots consumed by the permission engine.

These are frozen Pydantic models. The engine never mutates them and never
returns them: every public operation answers with identifier sets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import PermissionKind, SellsMode
from .exceptions import EmptyEdgePermissionSet

EntityId = int


class _Snapshot(BaseModel):
    model_config = {"frozen": True, "extra": "ignore"}


class Enterprise(_Snapshot):
    """Visibility anchor for every other entity."""

    id: EntityId
    name: str = ""
    sells: SellsMode = SellsMode.NONE
    is_primary_producer: bool = False
    is_distributor: bool = False


class EnterpriseRelationship(_Snapshot):
    """Directed grant edge: ``parent_id`` (grantor) extends ``permissions`` to ``child_id`` (grantee).

    Several edges may exist between the same pair; their permission sets are
    unioned by the grant graph. An empty permission set is invalid and never
    matches a query.
    """

    parent_id: EntityId
    child_id: EntityId
    permissions: frozenset[PermissionKind] = Field(default_factory=frozenset)

    @field_validator("permissions", mode="before")
    @classmethod
    def parse_permissions(cls, v: Any) -> frozenset[PermissionKind]:
        if v is None:
            return frozenset()
        if isinstance(v, (str, PermissionKind)):
            v = (v,)
        return frozenset(PermissionKind.parse(tag) for tag in v)

    def ensure_permissions(self) -> frozenset[PermissionKind]:
        """Return the permission set, raising if it is empty."""
        if not self.permissions:
            raise EmptyEdgePermissionSet(
                f"Relationship {self.parent_id} -> {self.child_id} grants no permissions",
                parent_id=self.parent_id,
                child_id=self.child_id,
            )
        return self.permissions

    def grants(self, permission: PermissionKind) -> bool:
        return permission in self.permissions


class User(_Snapshot):
    """Resolving user. Management links live in the entity store."""

    id: EntityId
    admin: bool = False


class OrderCycle(_Snapshot):
    """Order cycle with its coordinator and exchange participants."""

    id: EntityId
    coordinator_id: EntityId
    supplier_ids: frozenset[EntityId] = Field(default_factory=frozenset)
    distributor_ids: frozenset[EntityId] = Field(default_factory=frozenset)


class Order(_Snapshot):
    id: EntityId
    distributor_id: Optional[EntityId] = None
    order_cycle_id: Optional[EntityId] = None


class Product(_Snapshot):
    id: EntityId
    supplier_id: Optional[EntityId] = None


class Variant(_Snapshot):
    id: EntityId
    product_id: Optional[EntityId] = None


class LineItem(_Snapshot):
    id: EntityId
    order_id: EntityId
    variant_id: Optional[EntityId] = None


class Schedule(_Snapshot):
    id: EntityId
    order_cycle_ids: frozenset[EntityId] = Field(default_factory=frozenset)


class Subscription(_Snapshot):
    id: EntityId
    shop_id: EntityId


@dataclass(frozen=True)
class LineItemSupply:
    """A line item with the supplier reached through variant and product.

    ``supplier_id`` is None when any link of the chain is absent.
    """

    line_item_id: EntityId
    order_id: EntityId
    supplier_id: Optional[EntityId] = None


__all__ = [
    "EntityId",
    "Enterprise",
    "EnterpriseRelationship",
    "LineItem",
    "LineItemSupply",
    "Order",
    "OrderCycle",
    "Product",
    "Schedule",
    "Subscription",
    "User",
    "Variant",
]
