"""Tests for the exception hierarchy and permission kind parsing."""

from __future__ import annotations

import pytest

from hubperms import (
    ConfigurationError,
    DataAccessError,
    EmptyEdgePermissionSet,
    EnterpriseRelationship,
    HubPermsError,
    InvalidPermissionKind,
    PermissionKind,
    error_registry,
    register_error,
)


class TestExceptionHierarchy:
    """Tests for error codes and details."""

    @pytest.mark.parametrize(
        "error_cls,code",
        [
            (HubPermsError, "INTERNAL_ERROR"),
            (ConfigurationError, "CONFIGURATION_ERROR"),
            (DataAccessError, "DATA_ACCESS_ERROR"),
            (InvalidPermissionKind, "INVALID_PERMISSION_KIND"),
            (EmptyEdgePermissionSet, "EMPTY_EDGE_PERMISSION_SET"),
        ],
    )
    def test_codes(self, error_cls, code) -> None:
        err = error_cls()
        assert err.code == code
        assert isinstance(err, HubPermsError)
        assert error_registry.get(code) is error_cls

    def test_default_message(self) -> None:
        assert str(DataAccessError()) == "Entity store lookup failed"

    def test_custom_message_and_details(self) -> None:
        err = DataAccessError("timeout", operation="relationships_to")
        assert err.message == "timeout"
        assert err.details == {"operation": "relationships_to"}

    def test_code_override(self) -> None:
        assert HubPermsError("boom", code="STORE_DOWN").code == "STORE_DOWN"

    def test_register_custom_error(self) -> None:
        @register_error("STORE_TIMEOUT")
        class StoreTimeout(DataAccessError):
            code = "STORE_TIMEOUT"

        assert error_registry.get("STORE_TIMEOUT") is StoreTimeout
        assert "STORE_TIMEOUT" in error_registry.all()

    def test_unknown_code(self) -> None:
        assert error_registry.get("NOPE") is None


class TestPermissionKindParse:
    """Tests for PermissionKind.parse."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (PermissionKind.EDIT_PROFILE, PermissionKind.EDIT_PROFILE),
            ("add_to_order_cycle", PermissionKind.ADD_TO_ORDER_CYCLE),
            ("MANAGE_PRODUCTS", PermissionKind.MANAGE_PRODUCTS),
            (" create_variant_overrides ", PermissionKind.CREATE_VARIANT_OVERRIDES),
        ],
    )
    def test_accepted(self, value, expected) -> None:
        assert PermissionKind.parse(value) is expected

    @pytest.mark.parametrize("value", ["", "admin", "edit-profile", None, 3, ["edit_profile"]])
    def test_rejected(self, value) -> None:
        with pytest.raises(InvalidPermissionKind) as exc_info:
            PermissionKind.parse(value)
        assert exc_info.value.details["value"] == value


class TestRelationshipPermissions:
    """Tests for EnterpriseRelationship permission sets."""

    def test_string_tags_are_parsed(self) -> None:
        edge = EnterpriseRelationship(parent_id=1, child_id=2, permissions=["edit_profile", "EDIT_PROFILE"])
        assert edge.permissions == {PermissionKind.EDIT_PROFILE}
        assert edge.grants(PermissionKind.EDIT_PROFILE)
        assert not edge.grants(PermissionKind.MANAGE_PRODUCTS)

    def test_single_tag(self) -> None:
        edge = EnterpriseRelationship(parent_id=1, child_id=2, permissions="manage_products")
        assert edge.permissions == {PermissionKind.MANAGE_PRODUCTS}

    def test_ensure_permissions_on_empty_edge(self) -> None:
        edge = EnterpriseRelationship(parent_id=1, child_id=2)
        with pytest.raises(EmptyEdgePermissionSet) as exc_info:
            edge.ensure_permissions()
        assert exc_info.value.details == {"parent_id": 1, "child_id": 2}

    def test_ensure_permissions_on_valid_edge(self) -> None:
        edge = EnterpriseRelationship(parent_id=1, child_id=2, permissions=["edit_profile"])
        assert edge.ensure_permissions() == {PermissionKind.EDIT_PROFILE}

    def test_relationship_is_frozen(self) -> None:
        edge = EnterpriseRelationship(parent_id=1, child_id=2, permissions=["edit_profile"])
        with pytest.raises(Exception):  # Pydantic frozen instance error
            edge.parent_id = 3  # type: ignore[misc]
