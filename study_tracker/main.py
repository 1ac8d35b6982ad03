import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from study_tracker.config import Settings, settings
from study_tracker.routes import courses
from study_tracker.services.kv_store import KeyValueStore, SqliteStore, build_store
from study_tracker.services.ledger import Ledger
from study_tracker.services.storage import CourseStore
from study_tracker.services.writer import SnapshotWriter

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Settings | None = None, kv: KeyValueStore | None = None
) -> FastAPI:
    cfg = app_settings or settings
    if kv is None:
        kv = build_store(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load the ledger on startup; flush queued saves on shutdown."""
        if isinstance(kv, SqliteStore):
            await kv.init()
        store = CourseStore(kv, key=cfg.storage_key)
        ledger = Ledger(store, SnapshotWriter(store, serialize=cfg.serialize_saves))
        await ledger.load()
        app.state.ledger = ledger
        yield
        await ledger.writer.flush()

    app = FastAPI(
        title="study-tracker",
        description="Log study sessions per course and track cumulative time",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(courses.router)
    return app


app = create_app()


def run() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Serving on %s:%d (%s store)", settings.host, settings.port, settings.store_backend)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
