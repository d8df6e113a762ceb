"""
String-keyed value storage.

The roster only ever needs three operations on its backing store: read a
value, overwrite a value, delete a value. There are no transactions and no
partial writes; the last writer wins.
"""

from __future__ import annotations

from typing import Optional, Protocol

from studysync.database.connection import KV_STORE_COLLECTION, get_collection


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...

    async def remove(self, key: str) -> None: ...


class MongoKeyValueStore:
    """Keeps each key as one document: ``{_id: key, value: <str>}``."""

    def __init__(self, collection_name: str = KV_STORE_COLLECTION):
        self.collection_name = collection_name

    def _collection(self):
        return get_collection(self.collection_name)

    async def get(self, key: str) -> Optional[str]:
        doc = await self._collection().find_one({"_id": key})
        if not doc:
            return None
        value = doc.get("value")
        return value if isinstance(value, str) else None

    async def set(self, key: str, value: str) -> None:
        await self._collection().replace_one({"_id": key}, {"_id": key, "value": value}, upsert=True)

    async def remove(self, key: str) -> None:
        await self._collection().delete_one({"_id": key})


class InMemoryKeyValueStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    async def remove(self, key: str) -> None:
        self._values.pop(key, None)
