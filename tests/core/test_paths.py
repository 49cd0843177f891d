"""Tests for path parsing, lookup and in-place writes."""

from dataclasses import dataclass

import pytest
from hypothesis import given
from hypothesis import strategies as st

from smartclone import MISSING, InvalidPathError
from smartclone.core.paths import get_key, get_path, has_path, parse_path, set_key, set_path


@dataclass
class Settings:
    host: str
    extra: dict


# parse_path


def test_parse_splits_on_dots():
    assert parse_path("a.b.c") == ["a", "b", "c"]


def test_parse_drops_empty_segments():
    assert parse_path(".a..b.") == ["a", "b"]
    assert parse_path("") == []


def test_parse_passes_through_segment_sequences():
    assert parse_path(["a", "b.c", 0]) == ["a", "b.c", 0]
    assert parse_path(("x",)) == ["x"]


def test_parse_rejects_other_types():
    with pytest.raises(InvalidPathError):
        parse_path(42)


segment_text = st.text(alphabet="abcxyz_0123456789", min_size=1, max_size=5)


@given(st.lists(segment_text, max_size=6))
def test_parse_is_idempotent(segments):
    dotted = ".".join(segments)
    once = parse_path(dotted)
    assert parse_path(once) == once
    assert once == segments


# has_path


def test_has_path_true_for_present_keys():
    data = {"a": {"b": {"c": 1}}}
    assert has_path(data, "a.b.c")
    assert has_path(data, ["a", "b"])


def test_has_path_false_when_walk_breaks():
    data = {"a": {"b": 1}}
    assert not has_path(data, "a.x")
    assert not has_path(data, "a.b.c")
    assert not has_path(None, "a")


def test_has_path_is_about_presence_not_truthiness():
    data = {"a": {"b": None, "c": MISSING, "d": 0}}
    assert has_path(data, "a.b")
    assert has_path(data, "a.c")
    assert has_path(data, "a.d")


def test_has_path_through_list_index_and_attribute():
    data = {"items": [{"name": "first"}], "cfg": Settings("h", {"k": 1})}
    assert has_path(data, "items.0.name")
    assert not has_path(data, "items.1")
    assert has_path(data, "cfg.extra.k")
    assert not has_path(data, "cfg.port")


def test_empty_path_exists():
    assert has_path({}, "")


# get_path


def test_get_path_returns_value():
    assert get_path({"a": {"b": 2}}, "a.b") == 2


def test_get_path_returns_default_when_missing():
    assert get_path({"a": {}}, "a.b.c", "fallback") == "fallback"
    assert get_path({"a": 1}, "a.b", "fallback") == "fallback"
    assert get_path({}, "x") is None


def test_get_path_keeps_explicit_none():
    assert get_path({"a": None}, "a", "fallback") is None


def test_get_path_treats_missing_sentinel_as_absent():
    assert get_path({"a": MISSING}, "a", "fallback") == "fallback"


def test_get_path_empty_returns_container():
    data = {"a": 1}
    assert get_path(data, "") is data


# set_path


def test_set_path_mutates_and_returns_same_container():
    data = {"a": {"b": 1}}
    result = set_path(data, "a.b", 2)
    assert result is data
    assert data == {"a": {"b": 2}}


def test_set_path_creates_intermediate_mappings():
    data = {}
    set_path(data, "a.b.c", "v")
    assert data == {"a": {"b": {"c": "v"}}}


def test_set_path_replaces_non_container_intermediate():
    data = {"a": 5}
    set_path(data, "a.b", 1)
    assert data == {"a": {"b": 1}}


def test_set_path_writes_list_items():
    data = {"items": [1, 2]}
    set_path(data, "items.1", 20)
    set_path(data, "items.2", 30)
    assert data == {"items": [1, 20, 30]}


def test_set_path_rejects_list_index_past_end():
    with pytest.raises(InvalidPathError):
        set_path({"items": []}, "items.3", 1)


def test_set_path_rejects_empty_path():
    with pytest.raises(InvalidPathError):
        set_path({}, "", 1)


def test_set_path_sets_object_attributes():
    cfg = Settings("localhost", {})
    set_path(cfg, "host", "remote")
    set_path(cfg, "extra.retries", 3)
    assert cfg.host == "remote"
    assert cfg.extra == {"retries": 3}


def test_get_key_and_set_key():
    data = {"a": 1}
    assert get_key(data, "a") == 1
    assert get_key(data, "b") is MISSING
    set_key(data, "b", 2)
    assert data["b"] == 2
