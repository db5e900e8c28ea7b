"""Persistence layer: the JSON document store and its repositories."""

from .store import InMemoryStore, JsonFileStore, Store, default_document

__all__ = ["InMemoryStore", "JsonFileStore", "Store", "default_document"]
