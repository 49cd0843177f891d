"""Per-environment configuration built from a shared base.

Every environment is a deep merge of the base with its overrides, and later
tweaks are applied as path updates. Nothing ever mutates the base config.
"""

from typing import Any

from smartclone import clone, merge, update_all_at


class ConfigurationManager:
    def __init__(self, base_config: dict[str, Any] | None = None):
        self.base_config = clone(base_config or {})
        self.environments: dict[str, dict[str, Any]] = {}

    def create_environment(self, name: str, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        config = merge(self.base_config, overrides or {})
        self.environments[name] = config
        return config

    def update_environment(self, name: str, updates: dict[str, Any]) -> dict[str, Any]:
        if name not in self.environments:
            raise KeyError(f"Environment {name} not found")
        updated = update_all_at(self.environments[name], updates)
        self.environments[name] = updated
        return updated

    def get_environment(self, name: str) -> dict[str, Any]:
        return clone(self.environments[name])


BASE_CONFIG = {
    "database": {
        "connection": {"host": "localhost", "port": 5432, "pool": {"min": 2, "max": 10}},
        "ssl": False,
    },
    "api": {
        "cors": {"origins": ["http://localhost:3000"]},
        "rate_limit": {"window_ms": 15000, "max_requests": 100},
    },
    "logging": {"level": "info", "transports": ["console"]},
    "features": {"real_time": True, "analytics": False},
}


def main() -> None:
    manager = ConfigurationManager(BASE_CONFIG)

    manager.create_environment(
        "development",
        {"logging": {"level": "debug", "transports": ["console", "file"]}},
    )
    manager.create_environment(
        "production",
        {
            "database": {
                "connection": {"host": "prod-db.company.com", "pool": {"min": 5, "max": 50}},
                "ssl": True,
            },
            "api": {"cors": {"origins": ["https://app.company.com"]}},
            "logging": {"level": "error", "transports": ["file"]},
            "features": {"analytics": True},
        },
    )
    manager.update_environment(
        "production",
        {
            "database.connection.pool.max": 100,
            "api.rate_limit.max_requests": 1000,
        },
    )

    dev = manager.get_environment("development")
    prod = manager.get_environment("production")

    print(f"Development database: {dev['database']['connection']['host']}")
    print(f"Production database:  {prod['database']['connection']['host']}")
    print(f"Production pool max:  {prod['database']['connection']['pool']['max']}")
    print(f"Base pool max:        {BASE_CONFIG['database']['connection']['pool']['max']}")
    print(f"Dev transports:       {dev['logging']['transports']}")


if __name__ == "__main__":
    main()
