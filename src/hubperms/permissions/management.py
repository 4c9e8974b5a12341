"""Direct management links between users and enterprises."""

from __future__ import annotations

from ..interfaces import EntityStore, Ids
from ..models import User


class ManagementIndex:
    """Thin read adapter: which enterprises a user owns, and whether it is an admin."""

    __slots__ = ("_store",)

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    def managed_by(self, user: User) -> Ids:
        return self._store.managed_enterprise_ids(user.id)

    def is_admin(self, user: User) -> bool:
        return bool(user.admin)


__all__ = ["ManagementIndex"]
