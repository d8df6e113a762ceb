from __future__ import annotations

import httpx
import pytest

from studysync import main
from studysync.config import settings


@pytest.mark.asyncio
async def test_lifespan_wires_memory_backed_roster(monkeypatch):
    monkeypatch.setattr(settings, "storage_backend", "memory")
    monkeypatch.setattr(settings, "submit_delay_ms", 0)

    async with main.lifespan(main.app):
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=main.app), base_url="http://test") as client:
            health = await client.get("/health")
            assert health.json() == {"status": "ok", "storage": "memory"}

            res = await client.post("/api/registrations", json={"full_name": "Alice"})
            assert res.status_code == 201

            groups = await client.get("/api/groups")
            assert sum(g["member_count"] for g in groups.json()["groups"]) == 1


def test_unknown_storage_backend_is_rejected():
    with pytest.raises(ValueError):
        main.create_kv_store(settings.model_copy(update={"storage_backend": "sqlite"}))


@pytest.mark.asyncio
async def test_mongo_helpers_before_connect():
    from studysync.database import connection

    assert await connection.ping_mongo() is False
    with pytest.raises(RuntimeError):
        connection.get_db()
