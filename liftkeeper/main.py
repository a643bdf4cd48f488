import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from liftkeeper.api.v1.api import api_router
from liftkeeper.core.config import settings
from liftkeeper.core.errors import CommandRejected, SnapshotVersionError
from liftkeeper.db.mongo import connect_to_mongo, disconnect_from_mongo, get_db
from liftkeeper.repositories.snapshot_repo import SnapshotRepository
from liftkeeper.store.state_store import StateStore

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def load_store() -> StateStore:
    """Start from the saved snapshot when there is a usable one."""
    store = StateStore()
    if not settings.PERSISTENCE_ENABLED:
        return store

    try:
        saved = await SnapshotRepository(get_db()).load()
    except SnapshotVersionError as exc:
        logger.error("Ignoring saved snapshot: %s", exc)
        return store
    except PyMongoError:
        logger.exception("Could not load snapshot, starting from the default state")
        return store

    if saved is not None:
        store.replace_state(saved)
        logger.info("Loaded snapshot with %d building(s)", len(saved.buildings))
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.PERSISTENCE_ENABLED:
        await connect_to_mongo()
    app.state.store = await load_store()
    yield
    await disconnect_from_mongo()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CommandRejected)
async def command_rejected_handler(request: Request, exc: CommandRejected):
    return JSONResponse(
        status_code=409,
        content={"applied": False, "type": exc.command_type, "reason": exc.reason},
    )


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}


app.include_router(api_router, prefix=settings.API_V1_STR)
