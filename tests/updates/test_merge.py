"""Tests for deep merge."""

import copy
import datetime
import re
from collections import OrderedDict, deque, namedtuple
from dataclasses import dataclass, field

import pytest
from hypothesis import given
from hypothesis import strategies as st

from smartclone import ArrayStrategy, InvalidTargetError, MergeOptions, deep_merge, merge


Point = namedtuple("Point", "x y")


@dataclass
class Limits:
    rate: int = 10
    burst: int = 20
    tags: list[str] = field(default_factory=list)


class TestArrayStrategy:
    def test_replace_is_default(self):
        assert merge({"items": [1, 2]}, {"items": [3, 4]}) == {"items": [3, 4]}

    def test_merge_appends(self):
        result = merge({"items": [1, 2]}, {"items": [3, 4]}, array_strategy="merge")
        assert result == {"items": [1, 2, 3, 4]}

    def test_merge_with_options_object(self):
        options = MergeOptions(array_strategy=ArrayStrategy.MERGE)
        assert merge({"items": [1]}, {"items": [2]}, options) == {"items": [1, 2]}

    def test_merge_without_existing_sequence_uses_source(self):
        assert merge({"items": "scalar"}, {"items": [1]}, array_strategy="merge") == {"items": [1]}
        assert merge({}, {"items": [1]}, array_strategy="merge") == {"items": [1]}

    def test_appended_items_are_clones(self):
        source = {"items": [{"id": 1}]}
        result = merge({"items": [{"id": 0}]}, source, array_strategy="merge")
        assert result["items"] == [{"id": 0}, {"id": 1}]
        assert result["items"][1] is not source["items"][0]

    def test_replaced_sequence_is_a_clone(self):
        source = {"items": [[1]]}
        result = merge({}, source)
        assert result["items"] is not source["items"]
        assert result["items"][0] is not source["items"][0]

    def test_merge_keeps_deque_bound(self):
        result = merge({"recent": deque([1, 2], maxlen=3)}, {"recent": [3, 4]}, array_strategy="merge")
        assert result["recent"] == deque([2, 3, 4])
        assert result["recent"].maxlen == 3

    def test_merge_into_named_tuple(self):
        result = merge({"p": Point(1, 2)}, {"p": [3]}, array_strategy="merge")
        assert result["p"] == (1, 2, 3)
        assert type(result["p"]) is tuple

    def test_merge_keeps_named_tuple_within_arity(self):
        result = merge({"p": Point(1, 2)}, {"p": []}, array_strategy="merge")
        assert result["p"] == Point(1, 2)
        assert isinstance(result["p"], Point)

    def test_unknown_array_strategy(self):
        with pytest.raises(ValueError):
            merge({}, {}, array_strategy="zip")


class TestMergeSemantics:
    def test_nested_mappings_merge_recursively(self):
        target = {"db": {"host": "localhost", "port": 5432, "pool": {"min": 2, "max": 10}}}
        source = {"db": {"host": "prod", "pool": {"max": 50}}}
        assert merge(target, source) == {
            "db": {"host": "prod", "port": 5432, "pool": {"min": 2, "max": 50}}
        }

    def test_target_only_keys_are_kept(self):
        assert merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_non_container_in_target_is_replaced(self):
        assert merge({"a": 1}, {"a": {"b": 2}}) == {"a": {"b": 2}}
        assert merge({"a": [1]}, {"a": {"b": 2}}) == {"a": {"b": 2}}

    def test_atomics_and_none_override(self):
        assert merge({"a": {"b": 1}}, {"a": None}) == {"a": None}
        assert merge({"a": {"b": 1}}, {"a": "flat"}) == {"a": "flat"}

    def test_temporal_and_pattern_are_assigned_whole(self):
        when = datetime.datetime(2024, 6, 1)
        rx = re.compile("x+")
        result = merge({"when": {"old": True}, "rx": None}, {"when": when, "rx": rx})
        assert result["when"] == when
        assert result["rx"].pattern == "x+"

    def test_sets_are_assigned_as_copies(self):
        source = {"tags": {"a", "b"}}
        result = merge({"tags": {"c"}}, source)
        assert result["tags"] == {"a", "b"}
        assert result["tags"] is not source["tags"]

    def test_associative_map_source_merges_into_mapping(self):
        result = merge({"cfg": {"a": 1}}, {"cfg": OrderedDict(b=2)})
        assert result == {"cfg": {"a": 1, "b": 2}}

    def test_objects_merge_by_fields(self):
        target = {"limits": Limits(rate=5, tags=["x"])}
        result = merge(target, {"limits": {"burst": 99}})
        assert result["limits"] == Limits(rate=5, burst=99, tags=["x"])
        assert target["limits"].burst == 20

    def test_object_source_merges_into_mapping(self):
        result = merge({"limits": {"rate": 1, "extra": True}}, {"limits": Limits(rate=2)})
        assert result == {"limits": {"rate": 2, "burst": 20, "tags": [], "extra": True}}

    def test_source_cycle_is_reproduced(self):
        source = {"name": "loop"}
        source["self"] = source
        result = merge({"kept": 1}, source)
        assert result["self"] is result
        assert result["kept"] == 1

    @pytest.mark.parametrize(("target", "source"), [([1], {}), ({}, [1]), (None, {}), ({}, 3)])
    def test_rejects_non_record_roots(self, target, source):
        with pytest.raises(InvalidTargetError):
            merge(target, source)

    def test_alias(self):
        assert deep_merge is merge


json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(max_size=5),
    lambda inner: st.lists(inner, max_size=3) | st.dictionaries(st.text(max_size=3), inner, max_size=3),
    max_leaves=12,
)
json_objects = st.dictionaries(st.text(max_size=3), json_values, max_size=4)


@given(json_objects, json_objects, st.sampled_from(["replace", "merge"]))
def test_merge_never_mutates_inputs(target, source, array_strategy):
    target_before = copy.deepcopy(target)
    source_before = copy.deepcopy(source)

    result = merge(target, source, array_strategy=array_strategy)

    assert target == target_before
    assert source == source_before
    assert result is not target


@given(json_objects, json_objects)
def test_source_keys_win_for_scalars(target, source):
    result = merge(target, source)
    for key, value in source.items():
        if not isinstance(value, (dict, list)):
            assert result[key] == value
