"""Permission kinds and enterprise selling modes.

Provides:
- ``PermissionKind`` — the fixed set of authority tags a grant edge can carry.
- ``SellsMode`` — what an enterprise sells (``none`` / ``own`` / ``any``).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from .exceptions import InvalidPermissionKind


class PermissionKind(str, Enum):
    """Unit of authority carried by an enterprise relationship.

    Values match the stored tags, so ``PermissionKind("edit_profile")`` and
    ``PermissionKind.parse("EDIT_PROFILE")`` both work. Only :meth:`parse`
    raises :class:`InvalidPermissionKind` for unknown input.
    """

    ADD_TO_ORDER_CYCLE = "add_to_order_cycle"
    EDIT_PROFILE = "edit_profile"
    MANAGE_PRODUCTS = "manage_products"
    CREATE_VARIANT_OVERRIDES = "create_variant_overrides"

    @classmethod
    def parse(cls, value: Any) -> PermissionKind:
        """Coerce a tag to a PermissionKind, failing fast on anything else.

        Accepts enum members, stored values (``"manage_products"``) and
        member names in any case (``"MANAGE_PRODUCTS"``).

        Raises:
            InvalidPermissionKind: ``value`` is not one of the four kinds.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            tag = value.strip()
            try:
                return cls(tag.lower())
            except ValueError:
                pass
            member = cls.__members__.get(tag.upper())
            if member is not None:
                return member
        raise InvalidPermissionKind(
            f"Unknown permission kind: {value!r}. Must be one of {[k.value for k in cls]}",
            value=value,
        )


class SellsMode(str, Enum):
    """Selling mode of an enterprise."""

    NONE = "none"
    OWN = "own"
    ANY = "any"


__all__ = [
    "PermissionKind",
    "SellsMode",
]
