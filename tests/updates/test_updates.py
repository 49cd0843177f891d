"""Tests for update_at and update_all_at."""

from dataclasses import dataclass

import pytest

from smartclone import (
    InvalidTargetError,
    UpdateOptions,
    update_all_at,
    update_at,
    update_multiple,
    update_nested,
)


@dataclass
class ServerConfig:
    host: str
    port: int


class TestUpdateAt:
    def test_does_not_mutate_original(self):
        original = {"a": {"b": 1}}
        result = update_at(original, "a.b", 2)

        assert original["a"]["b"] == 1
        assert result["a"]["b"] == 2
        assert result is not original
        assert result["a"] is not original["a"]

    def test_creates_missing_path(self):
        assert update_at({}, "a.b.c", "v")["a"]["b"]["c"] == "v"

    def test_accepts_segment_list(self):
        assert update_at({"x": {}}, ["x", "y.z"], 1) == {"x": {"y.z": 1}}

    def test_untouched_branches_are_still_copies(self):
        original = {"a": {"b": 1}, "other": {"keep": [1, 2]}}
        result = update_at(original, "a.b", 2)
        assert result["other"] == original["other"]
        assert result["other"] is not original["other"]

    def test_clone_false_mutates_in_place(self):
        original = {"a": {"b": 1}}
        result = update_at(original, "a.b", 2, clone=False)
        assert result is original
        assert original["a"]["b"] == 2

    def test_options_object(self):
        original = {"a": 1}
        assert update_at(original, "a", 2, UpdateOptions(clone=False)) is original

    def test_updates_list_elements(self):
        original = {"items": [{"name": "a"}, {"name": "b"}]}
        result = update_at(original, "items.1.name", "B")
        assert result["items"][1]["name"] == "B"
        assert original["items"][1]["name"] == "b"

    def test_updates_object_attributes(self):
        original = ServerConfig("localhost", 80)
        result = update_at(original, "port", 8080)
        assert result.port == 8080
        assert original.port == 80
        assert isinstance(result, ServerConfig)

    def test_preserves_cycles_in_copy(self, cyclic):
        result = update_at(cyclic, "a", 2)
        assert result["self"] is result
        assert cyclic["a"] == 1

    @pytest.mark.parametrize("target", [None, 5, "text", (1, 2)])
    def test_rejects_non_container_roots(self, target):
        with pytest.raises(InvalidTargetError):
            update_at(target, "a", 1)

    def test_alias(self):
        assert update_nested is update_at


class TestUpdateAllAt:
    def test_applies_every_write_to_one_copy(self):
        original = {"database": {"pool": {"max": 10}}, "api": {"limit": 100}}
        result = update_all_at(
            original,
            {"database.pool.max": 100, "api.limit": 1000, "api.cors.origins": ["*"]},
        )
        assert result == {
            "database": {"pool": {"max": 100}},
            "api": {"limit": 1000, "cors": {"origins": ["*"]}},
        }
        assert original == {"database": {"pool": {"max": 10}}, "api": {"limit": 100}}

    def test_prefix_paths_last_write_wins(self):
        """First write sets a=1, second replaces the non-container 1 with {} and sets b."""
        assert update_all_at({}, {"a": 1, "a.b": 2}) == {"a": {"b": 2}}

    def test_overwriting_a_branch(self):
        assert update_all_at({}, {"a.b": 2, "a": 1}) == {"a": 1}

    def test_same_path_twice_keeps_last(self):
        assert update_all_at({}, {"x": 1, "x.": 2}) == {"x": 2}

    def test_clone_false_mutates_in_place(self):
        original = {"a": 1}
        result = update_all_at(original, {"b": 2}, clone=False)
        assert result is original
        assert original == {"a": 1, "b": 2}

    def test_empty_updates_still_copies(self):
        original = {"a": {"b": 1}}
        result = update_all_at(original, {})
        assert result == original
        assert result is not original

    def test_rejects_non_container_roots(self):
        with pytest.raises(InvalidTargetError):
            update_all_at(42, {"a": 1})

    def test_alias(self):
        assert update_multiple is update_all_at
