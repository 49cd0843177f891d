"""Shared test fixtures."""

import os
import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass, field

from smartclone.config import get_settings


# Tests assume library defaults, whatever the developer has exported
for _name in [name for name in os.environ if name.startswith("SMARTCLONE_")]:
    del os.environ[_name]


@pytest.fixture
def fresh_settings():
    """Drop cached settings around a test that changes SMARTCLONE_* variables.

    Only the cache is cleared on teardown; the next read happens after
    monkeypatch has restored the environment.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@dataclass
class FixtureNode:
    name: str
    children: list["FixtureNode"] = field(default_factory=list)
    parent: "FixtureNode | None" = None


@dataclass(slots=True, frozen=True)
class FixturePoint:
    x: float
    y: float


@pytest.fixture
def node_cls():
    return FixtureNode


@pytest.fixture
def point_cls():
    return FixturePoint


@pytest.fixture
def cyclic():
    """A mapping that refers to itself: ``c["self"] is c``."""
    c = {"a": 1}
    c["self"] = c
    return c


@pytest.fixture
def shared_graph():
    """Root reaching the same sub-object through two keys."""
    shared = {"x": 1}
    return {"p": shared, "q": shared}


@pytest.fixture
def three_levels():
    """Root -> a -> b -> c, every level a distinct dict."""
    return {"a": {"b": {"c": {"value": 1}}}}


@pytest.fixture
def plain_data():
    """JSON-compatible data every strategy must clone identically."""
    return {
        "name": "service",
        "port": 8080,
        "ratio": 0.5,
        "enabled": True,
        "owner": None,
        "tags": ["a", "b"],
        "nested": {"list": [1, {"deep": [2, 3]}], "empty": {}},
    }
