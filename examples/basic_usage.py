"""Cloning, path updates and deep merge on everyday data."""

import datetime
import re
from dataclasses import dataclass, field

from smartclone import clone, get_path, has_path, merge, update_all_at, update_at


@dataclass
class User:
    name: str
    joined: datetime.date
    friends: list["User"] = field(default_factory=list)


def cloning() -> None:
    original = {
        "name": "report",
        "created": datetime.datetime(2024, 1, 15, 9, 30),
        "filter": re.compile(r"^ERR-\d+$", re.IGNORECASE),
        "tags": {"daily", "ops"},
        "sections": [{"title": "Summary"}, {"title": "Details"}],
    }
    copy = clone(original)
    copy["sections"][0]["title"] = "Overview"
    print(f"Original section: {original['sections'][0]['title']}")
    print(f"Cloned section:   {copy['sections'][0]['title']}")

    # Self-referencing graphs keep their shape
    alice = User("alice", datetime.date(2020, 5, 1))
    bob = User("bob", datetime.date(2021, 3, 9), friends=[alice])
    alice.friends.append(bob)
    alice_copy = clone(alice)
    print(f"Cycle preserved: {alice_copy.friends[0].friends[0] is alice_copy}")

    # Depth cutoff: only the first level is copied
    shallow = clone(original, max_depth=1)
    print(f"Sections shared after cutoff: {shallow['sections'] is original['sections']}")

    # Forcing the JSON round trip is fast but lossy
    flat = clone(original, strategy="serialization")
    print(f"Serialized date: {flat['created']!r}, tags: {flat['tags']!r}")


def updating() -> None:
    state = {"user": {"profile": {"name": "Ada"}, "settings": {"theme": "light"}}}

    renamed = update_at(state, "user.profile.name", "Ada Lovelace")
    print(f"Before: {get_path(state, 'user.profile.name')}")
    print(f"After:  {get_path(renamed, 'user.profile.name')}")

    batch = update_all_at(
        state,
        {
            "user.settings.theme": "dark",
            "user.settings.notifications.email": True,
        },
    )
    print(f"Has notifications: {has_path(batch, 'user.settings.notifications.email')}")

    defaults = {"retries": 3, "hosts": ["a.internal"], "timeouts": {"read": 5, "write": 5}}
    override = {"hosts": ["b.internal"], "timeouts": {"write": 30}}
    print(f"Replace arrays: {merge(defaults, override)}")
    print(f"Merge arrays:   {merge(defaults, override, array_strategy='merge')}")


if __name__ == "__main__":
    cloning()
    print()
    updating()
