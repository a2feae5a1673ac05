"""Tests for per-entry identifier classification."""

import pytest

from typedid.classify import (
    Drop,
    Keep,
    classify,
    classify_entry,
    coerce_value,
    is_empty,
    resolve_itemtype,
)
from typedid.config import TransformConfig
from typedid.detect import PatternDetector
from typedid.policy import UNRESTRICTED, AllowListPolicy

ALLOW_WITH_GENERIC = AllowListPolicy(
    allowed=frozenset({"openalex", "doi", "generic"}), generic_allowed=True
)
ALLOW_STRICT = AllowListPolicy(allowed=frozenset({"openalex", "doi"}), generic_allowed=False)

CHECKED = TransformConfig(check_allow_list=True)
CHECKED_FALLBACK = TransformConfig(check_allow_list=True, use_generic_fallback=True)


@pytest.mark.parametrize("value", [None, False, 0, 0.0, "", "0", [], {}])
def test_is_empty_true(value):
    assert is_empty(value)


@pytest.mark.parametrize("value", ["x", " ", "00", 1, -1, 0.5, True, ["a"]])
def test_is_empty_false(value):
    assert not is_empty(value)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("W123", "W123"),
        (2021, "2021"),
        (0.95, "0.95"),
        (2021.0, "2021"),
        (-3, "-3"),
        (True, "1"),
    ],
)
def test_coerce_value(value, expected):
    assert coerce_value(value) == expected


def test_resolve_itemtype_without_checks_keeps_key():
    assert resolve_itemtype("anything", TransformConfig(), ALLOW_STRICT) == "anything"


def test_resolve_itemtype_allowed_key():
    assert resolve_itemtype("doi", CHECKED, ALLOW_STRICT) == "doi"


def test_resolve_itemtype_generic_fallback():
    assert resolve_itemtype("datacite", CHECKED_FALLBACK, ALLOW_WITH_GENERIC) == "generic:datacite"


def test_resolve_itemtype_fallback_option_required():
    assert resolve_itemtype("datacite", CHECKED, ALLOW_WITH_GENERIC) is None


def test_resolve_itemtype_generic_entry_required():
    assert resolve_itemtype("datacite", CHECKED_FALLBACK, ALLOW_STRICT) is None


def test_resolve_itemtype_empty_policy_drops_everything():
    assert resolve_itemtype("doi", CHECKED_FALLBACK, UNRESTRICTED) is None


def test_classify_entry_excluded_key():
    config = TransformConfig(exclude_keys=frozenset({"mag"}))

    decision = classify_entry("mag", "12345", config, UNRESTRICTED)

    assert decision == Drop("excluded key")


def test_classify_entry_excluded_key_beats_fallback():
    config = TransformConfig(
        exclude_keys=frozenset({"mag"}), check_allow_list=True, use_generic_fallback=True
    )

    decision = classify_entry("mag", "12345", config, ALLOW_WITH_GENERIC)

    assert isinstance(decision, Drop)


def test_classify_entry_zero_is_dropped():
    assert classify_entry("count", 0, TransformConfig(), UNRESTRICTED) == Drop("empty value")


def test_classify_entry_nested_value_is_dropped():
    decision = classify_entry("affiliations", ["Yale"], TransformConfig(), UNRESTRICTED)

    assert decision == Drop("non-scalar value")


def test_classify_entry_keeps_coerced_value():
    assert classify_entry("year", 2021, TransformConfig(), UNRESTRICTED) == Keep("year", "2021")


def test_classify_entry_detects_id_with_pattern_detector():
    decision = classify_entry(
        "id", "https://doi.org/10.1234/abc", TransformConfig(), UNRESTRICTED, PatternDetector()
    )

    assert decision == Keep("doi", "10.1234/abc")


def test_classify_entry_id_without_detector_uses_key():
    decision = classify_entry("id", "https://doi.org/10.1234/abc", TransformConfig(), UNRESTRICTED)

    assert decision == Keep("id", "https://doi.org/10.1234/abc")


def test_classify_preserves_order_across_maps():
    candidates = [{"b": "2", "a": "1"}, {"c": "3"}]

    items = classify(candidates, TransformConfig(), UNRESTRICTED)

    assert items == [
        {"itemtype": "b", "itemvalue": "2"},
        {"itemtype": "a", "itemvalue": "1"},
        {"itemtype": "c", "itemvalue": "3"},
    ]


def test_classify_string_casts_keys():
    items = classify([{7: "seven"}], TransformConfig(), UNRESTRICTED)

    assert items == [{"itemtype": "7", "itemvalue": "seven"}]


def test_classify_excluded_key_never_appears():
    config = TransformConfig(
        exclude_keys=frozenset({"mag"}), check_allow_list=True, use_generic_fallback=True
    )

    items = classify([{"mag": "1", "doi": "y"}, {"mag": "2"}], config, ALLOW_WITH_GENERIC)

    itemtypes = [item["itemtype"] for item in items]
    assert itemtypes == ["doi"]
    assert "generic:mag" not in itemtypes
