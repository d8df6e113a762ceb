from __future__ import annotations

import logging

from pydantic import TypeAdapter, ValidationError

from studysync.database.kv_store import KeyValueStore
from studysync.models.assignment import AssignmentRecord

logger = logging.getLogger(__name__)

_roster_adapter = TypeAdapter(list[AssignmentRecord])


class RosterStore:
    """
    Owns the ordered roster and mirrors it to a single storage key.

    Every structural mutation is followed by a whole-roster overwrite of the
    stored value. Two stores pointed at the same key do not coordinate; the
    last one to persist wins.
    """

    def __init__(self, storage: KeyValueStore, storage_key: str):
        self.storage = storage
        self.storage_key = storage_key
        self._records: list[AssignmentRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def snapshot(self) -> tuple[AssignmentRecord, ...]:
        return tuple(self._records)

    async def load(self) -> tuple[AssignmentRecord, ...]:
        raw = await self.storage.get(self.storage_key)
        if raw is None:
            self._records = []
            return self.snapshot()

        try:
            self._records = list(_roster_adapter.validate_json(raw))
        except ValidationError as e:
            logger.error(f"Failed to parse stored roster under key={self.storage_key}: {e}", exc_info=True)
            self._records = []
        return self.snapshot()

    async def persist(self) -> None:
        await self._write(self._records)

    async def _write(self, records: list[AssignmentRecord]) -> None:
        payload = _roster_adapter.dump_json(records, by_alias=True, exclude_none=True).decode("utf-8")
        await self.storage.set(self.storage_key, payload)

    async def _commit(self, records: list[AssignmentRecord]) -> None:
        # in-memory roster only changes once storage accepted the write
        await self._write(records)
        self._records = records

    async def append(self, record: AssignmentRecord) -> None:
        await self._commit([*self._records, record])

    async def remove(self, identity: str) -> bool:
        for i, record in enumerate(self._records):
            if record.identity == identity:
                await self._commit(self._records[:i] + self._records[i + 1:])
                return True
        return False

    async def clear(self) -> None:
        await self._commit([])
