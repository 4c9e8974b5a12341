"""Shared fixtures: a small food-hub network and resolver factories."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from hubperms import (
    Enterprise,
    EnterpriseRelationship,
    InMemoryEntityStore,
    PermissionKind,
    PermissionResolver,
    SellsMode,
    User,
)

ATOC = PermissionKind.ADD_TO_ORDER_CYCLE
EDIT = PermissionKind.EDIT_PROFILE
PRODUCTS = PermissionKind.MANAGE_PRODUCTS
OVERRIDES = PermissionKind.CREATE_VARIANT_OVERRIDES

# Enterprise ids used across tests
FARM = 1  # primary producer
HUB = 2  # distributor, sells own
ORCHARD = 3  # primary producer
PRODUCER_HUB = 4  # distributor and primary producer, sells any
AGENCY = 5  # neither


def producer(enterprise_id: int, **kwargs: Any) -> Enterprise:
    return Enterprise(id=enterprise_id, is_primary_producer=True, **kwargs)


def hub(enterprise_id: int, **kwargs: Any) -> Enterprise:
    return Enterprise(id=enterprise_id, is_distributor=True, **kwargs)


def grant(parent_id: int, child_id: int, *permissions: Any) -> EnterpriseRelationship:
    return EnterpriseRelationship(parent_id=parent_id, child_id=child_id, permissions=permissions)


@pytest.fixture
def enterprises() -> list[Enterprise]:
    return [
        producer(FARM, name="Farm", sells=SellsMode.NONE),
        hub(HUB, name="Hub", sells=SellsMode.OWN),
        producer(ORCHARD, name="Orchard", sells=SellsMode.NONE),
        Enterprise(
            id=PRODUCER_HUB,
            name="Producer hub",
            sells=SellsMode.ANY,
            is_primary_producer=True,
            is_distributor=True,
        ),
        Enterprise(id=AGENCY, name="Agency"),
    ]


@pytest.fixture
def make_store(enterprises: list[Enterprise]) -> Callable[..., InMemoryEntityStore]:
    """Build a store over the shared enterprises; keyword args override any collection."""

    def factory(**kwargs: Any) -> InMemoryEntityStore:
        kwargs.setdefault("enterprises", enterprises)
        return InMemoryEntityStore(**kwargs)

    return factory


@pytest.fixture
def make_resolver() -> Callable[..., PermissionResolver]:
    def factory(store: InMemoryEntityStore, user_id: int = 100, admin: bool = False, **kwargs: Any) -> PermissionResolver:
        return PermissionResolver(User(id=user_id, admin=admin), store, **kwargs)

    return factory
