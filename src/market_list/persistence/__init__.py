"""Key-value persistence for the market list application."""

from market_list.persistence.kv import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
