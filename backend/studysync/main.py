from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studysync.api import admin, groups, registrations
from studysync.config import Settings, settings
from studysync.database.connection import close_mongo_connection, connect_to_mongo, ping_mongo
from studysync.database.kv_store import InMemoryKeyValueStore, KeyValueStore, MongoKeyValueStore
from studysync.services.admin_gate import AdminGate
from studysync.services.registration_service import SubmissionGate
from studysync.services.roster_store import RosterStore

logger = logging.getLogger(__name__)


def _parse_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def create_kv_store(config: Settings) -> KeyValueStore:
    if config.storage_backend == "memory":
        return InMemoryKeyValueStore()
    if config.storage_backend == "mongo":
        return MongoKeyValueStore()
    raise ValueError(f"Unknown storage backend: {config.storage_backend}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    use_mongo = settings.storage_backend == "mongo"
    if use_mongo:
        await connect_to_mongo(settings)

    store = RosterStore(create_kv_store(settings), settings.storage_key)
    await store.load()
    logger.info(f"Roster loaded: records={len(store)}, backend={settings.storage_backend}")

    app.state.roster_store = store
    app.state.admin_gate = AdminGate(settings.admin_passcode)
    app.state.submission_gate = SubmissionGate()
    yield
    # Cleanup
    if use_mongo:
        await close_mongo_connection()


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_parse_origins(settings.allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(registrations.router, prefix="/api/registrations", tags=["registrations"])
app.include_router(groups.router, prefix="/api/groups", tags=["groups"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])


@app.get("/health")
async def health():
    if settings.storage_backend != "mongo":
        return {"status": "ok", "storage": settings.storage_backend}
    return {"status": "ok", "storage": "mongo", "storage_reachable": await ping_mongo()}
