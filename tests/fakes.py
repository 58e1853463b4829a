"""Minimal in-memory stand-ins for the PyMongo objects the loaders touch."""
from __future__ import annotations

from types import SimpleNamespace
from typing import Any


class FakeCollection:
    def __init__(self, name: str = "coll") -> None:
        self.name = name
        self.docs: dict[Any, dict[str, Any]] = {}
        self.batches = 0

    def bulk_write(self, ops: list[Any], ordered: bool = True) -> SimpleNamespace:
        self.batches += 1
        upserted = modified = 0
        for op in ops:
            ((key, value),) = op._filter.items()
            if value in self.docs:
                modified += 1
            else:
                upserted += 1
            self.docs[value] = dict(op._doc)
        return SimpleNamespace(upserted_count=upserted, modified_count=modified)

    def delete_many(self, query: dict[str, Any]) -> SimpleNamespace:
        keep = set(query["unique_id"]["$nin"])
        doomed = [k for k in self.docs if k not in keep]
        for k in doomed:
            del self.docs[k]
        return SimpleNamespace(deleted_count=len(doomed))


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}
        self.views: dict[str, dict[str, Any]] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection(name))

    def list_collection_names(self) -> list[str]:
        return [*self.collections, *self.views]

    def drop_collection(self, name: str) -> None:
        self.collections.pop(name, None)
        self.views.pop(name, None)

    def create_collection(self, name: str, **kwargs: Any) -> None:
        self.views[name] = kwargs
