"""Tests for allow-list policy resolution."""

from unittest.mock import MagicMock

from typedid.exceptions import FieldSettingsError
from typedid.policy import FAIL_CLOSED, UNRESTRICTED, AllowListPolicy, resolve_allow_list
from typedid.settings import FieldSettings, InMemoryFieldSettingsStore


def _store() -> InMemoryFieldSettingsStore:
    return InMemoryFieldSettingsStore(
        {
            "node.scholarly_work.field_work_typed_ids": FieldSettings(
                allowed_identifier_types=["openalex", "doi", "generic"]
            ),
            "node.scholarly_work.field_strict_ids": FieldSettings(
                allowed_identifier_types=["orcid"]
            ),
            "node.scholarly_work.field_unset_ids": FieldSettings(),
            "node.person.field_work_typed_ids": FieldSettings(allowed_identifier_types=["isni"]),
        }
    )


def test_disabled_checks_skip_lookup():
    store = MagicMock()

    policy = resolve_allow_list(store, "field_work_typed_ids", False)

    assert policy == UNRESTRICTED
    store.load.assert_not_called()


def test_empty_destination_field_skips_lookup():
    store = MagicMock()

    assert resolve_allow_list(store, "", True) == UNRESTRICTED
    store.load.assert_not_called()


def test_allowed_types_with_generic():
    policy = resolve_allow_list(_store(), "field_work_typed_ids", True)

    assert policy == AllowListPolicy(
        allowed=frozenset({"openalex", "doi", "generic"}), generic_allowed=True
    )
    assert policy.permits("doi")
    assert not policy.permits("pmid")


def test_allowed_types_without_generic():
    policy = resolve_allow_list(_store(), "field_strict_ids", True)

    assert policy.allowed == frozenset({"orcid"})
    assert not policy.generic_allowed


def test_missing_allowed_types_setting_is_empty():
    assert resolve_allow_list(_store(), "field_unset_ids", True) == FAIL_CLOSED


def test_unknown_field_fails_closed():
    assert resolve_allow_list(_store(), "field_nope", True) == FAIL_CLOSED


def test_missing_store_fails_closed():
    assert resolve_allow_list(None, "field_work_typed_ids", True) == FAIL_CLOSED


def test_lookup_error_fails_closed():
    store = MagicMock()
    store.load.side_effect = FieldSettingsError("corrupt settings")

    assert resolve_allow_list(store, "field_work_typed_ids", True) == FAIL_CLOSED


def test_bundle_override():
    policy = resolve_allow_list(_store(), "field_work_typed_ids", True, bundle="node.person")

    assert policy.allowed == frozenset({"isni"})
