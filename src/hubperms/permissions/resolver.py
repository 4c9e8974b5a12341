"""Enterprise-level permission resolution for one user.

``PermissionResolver`` combines direct management (``ManagementIndex``) with
the permission-typed grant graph (``GrantGraph``) into enterprise id sets:

- visible / editable / product-managing enterprises
- order-cycle complexity eligibility
- variant override hubs and the producers each hub may override

Admins short-circuit every enterprise-scoped query to the full enterprise
universe. A resolver belongs to one user request; its ``ResolutionCache`` is
never shared with another resolution.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Optional, TypeVar
from uuid import uuid4

from ..config import PermissionsConfig
from ..constants import PermissionKind, SellsMode
from ..interfaces import EntityStore, Ids
from ..logging import get_resolution_logger, preview_ids
from ..models import Enterprise, EntityId, User
from .graph import GrantGraph
from .management import ManagementIndex

_T = TypeVar("_T")


class ResolutionCache:
    """Memo for lookups repeated within one resolution.

    When disabled every lookup recomputes; results are identical either way.
    """

    __slots__ = ("enabled", "hits", "misses", "_values")

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self.hits = 0
        self.misses = 0
        self._values: dict[Hashable, Any] = {}

    def get_or_compute(self, key: Hashable, compute: Callable[[], _T]) -> _T:
        if self.enabled and key in self._values:
            self.hits += 1
            return self._values[key]
        self.misses += 1
        value = compute()
        if self.enabled:
            self._values[key] = value
        return value

    def clear(self) -> None:
        self._values.clear()

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ResolutionCache(entries={len(self._values)}, hits={self.hits}, misses={self.misses})"


class PermissionResolver:
    """Resolves enterprise visibility and authority for ``user``.

    Args:
        user: The user being resolved.
        store: Entity store to read enterprises, grants and management links from.
        config: Engine settings (memoization switch).
        cache: Cache to use instead of a fresh one (shared with entity queries
            of the same resolution).
        resolution_id: Id stamped on log records; generated when omitted.

    Example::

        resolver = PermissionResolver(user, store)
        resolver.visible_enterprises()       # frozenset({1, 4, 7})
        resolver.editable_enterprises()      # frozenset({1})
    """

    def __init__(
        self,
        user: User,
        store: EntityStore,
        *,
        config: Optional[PermissionsConfig] = None,
        cache: Optional[ResolutionCache] = None,
        resolution_id: Optional[str] = None,
    ) -> None:
        self._config = config or PermissionsConfig()
        self._user = user
        self._store = store
        self._graph = GrantGraph(store)
        self._management = ManagementIndex(store)
        self._cache = cache if cache is not None else ResolutionCache(enabled=self._config.memoize)
        self.resolution_id = resolution_id or uuid4().hex
        self._log = get_resolution_logger(__name__, user_id=user.id, resolution_id=self.resolution_id)

    @property
    def user(self) -> User:
        return self._user

    @property
    def store(self) -> EntityStore:
        return self._store

    @property
    def graph(self) -> GrantGraph:
        return self._graph

    @property
    def cache(self) -> ResolutionCache:
        return self._cache

    @property
    def is_admin(self) -> bool:
        return self._management.is_admin(self._user)

    # ── Building blocks ─────────────────────────────────

    def all_enterprise_ids(self) -> Ids:
        return self._cache.get_or_compute(("enterprise_ids",), self._store.enterprise_ids)

    def managed_enterprise_ids(self) -> Ids:
        """Enterprises the user directly manages (admin or not)."""
        return self._cache.get_or_compute(("managed",), lambda: self._management.managed_by(self._user))

    def managed_scope(self) -> Ids:
        """Enterprises treated as managed when deriving other results.

        The universe for admins, the direct management set otherwise.
        """
        if self.is_admin:
            return self.all_enterprise_ids()
        return self.managed_enterprise_ids()

    def managed_enterprises(self) -> list[Enterprise]:
        return self._cache.get_or_compute(("managed_records",), lambda: self._store.enterprises(self.managed_scope()))

    def managed_primary_producer_ids(self) -> Ids:
        return frozenset(e.id for e in self.managed_enterprises() if e.is_primary_producer)

    def coordinated_order_cycle_ids(self) -> Ids:
        """Order cycles coordinated by a managed enterprise."""
        return self._cache.get_or_compute(
            ("coordinated_order_cycles",),
            lambda: self._store.order_cycle_ids_by_coordinator(self.managed_scope()),
        )

    def granting_to(self, permission: Any) -> Ids:
        """Enterprises that granted ``permission`` to one of my managed enterprises."""
        kind = PermissionKind.parse(permission)

        def compute() -> Ids:
            result = self._graph.grantors_of(kind, self.managed_scope())
            self._log.debug("granting_to %s -> %s", kind.value, preview_ids(result))
            return result

        return self._cache.get_or_compute(("granting_to", kind), compute)

    def granted_by(self, permission: Any) -> Ids:
        """Enterprises my managed enterprises granted ``permission`` to."""
        kind = PermissionKind.parse(permission)

        def compute() -> Ids:
            result = self._graph.grantees_of(kind, self.managed_scope())
            self._log.debug("granted_by %s -> %s", kind.value, preview_ids(result))
            return result

        return self._cache.get_or_compute(("granted_by", kind), compute)

    def _managed_and_granting(self, kind: PermissionKind) -> Ids:
        if self.is_admin:
            return self.all_enterprise_ids()
        return self.managed_enterprise_ids() | self.granting_to(kind)

    # ── Enterprise sets ─────────────────────────────────

    def visible_enterprises(self) -> Ids:
        """Managed enterprises plus those that granted me ``add_to_order_cycle``."""
        return self._managed_and_granting(PermissionKind.ADD_TO_ORDER_CYCLE)

    def visible_enterprises_for_order_reports(self) -> Ids:
        """Visible enterprises plus those I granted ``add_to_order_cycle`` to."""
        if self.is_admin:
            return self.all_enterprise_ids()
        kind = PermissionKind.ADD_TO_ORDER_CYCLE
        return self.managed_enterprise_ids() | self.granting_to(kind) | self.granted_by(kind)

    def editable_enterprises(self) -> Ids:
        """Enterprises whose profile I may edit."""
        return self._managed_and_granting(PermissionKind.EDIT_PROFILE)

    def managed_product_enterprises(self) -> Ids:
        """Enterprises whose products I may manage."""
        return self._managed_and_granting(PermissionKind.MANAGE_PRODUCTS)

    def can_manage_complex_order_cycles(self) -> bool:
        """True if any visible enterprise sells ``any``."""
        candidates = self.visible_enterprises()
        return any(e.sells == SellsMode.ANY for e in self._store.enterprises(candidates))

    def manages_exactly_one_enterprise(self) -> bool:
        return len(self.managed_enterprise_ids()) == 1

    # ── Variant overrides ───────────────────────────────

    def variant_override_hubs(self) -> Ids:
        """Managed enterprises that are distributors."""
        return frozenset(e.id for e in self.managed_enterprises() if e.is_distributor)

    def variant_override_enterprises_per_hub(self) -> dict[EntityId, Ids]:
        """For every hub, the producers whose variants that hub may override.

        ``{hub_id: frozenset({producer_id, ...}), ...}``

        Producers appear through ``create_variant_overrides`` grants to the hub.
        A hub that is itself a primary producer always includes its own id.
        Hubs with neither are absent.
        """
        hubs = [e for e in self.managed_enterprises() if e.is_distributor]
        permitted = {
            hub_id: set(producers)
            for hub_id, producers in self._graph.grantors_per_grantee(
                PermissionKind.CREATE_VARIANT_OVERRIDES, [hub.id for hub in hubs]
            ).items()
        }

        for hub in hubs:
            if hub.is_primary_producer:
                permitted.setdefault(hub.id, set()).add(hub.id)

        return {hub_id: frozenset(producers) for hub_id, producers in permitted.items()}

    def variant_override_producers(self) -> Ids:
        producer_ids: set[EntityId] = set()
        for producers in self.variant_override_enterprises_per_hub().values():
            producer_ids |= producers
        return frozenset(producer_ids)


__all__ = [
    "PermissionResolver",
    "ResolutionCache",
]
