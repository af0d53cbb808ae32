"""SmartSummary API"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from errors import install_error_handlers
from smartsummary import __version__
from smartsummary.config import Settings
from smartsummary.providers import build_engines
from smartsummary.repositories import DatabasePool
from smartsummary.services import init_notifier, shutdown_notifier
from routes.health import router as health_router
from routes.notes import router as notes_router
from routes.summaries import router as summaries_router
from routes.uploads import router as uploads_router
from smartsummary.utils.logging_setup import setup_logging

settings = Settings()
setup_logging(settings)
logger = logging.getLogger("smartsummary.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.settings = settings
    app.state.db_pool = await DatabasePool.get_pool(settings)
    app.state.engines = build_engines(settings.engine)
    app.state.notifier = init_notifier(settings)
    logger.info(
        "API starting (uploads=%s, db=%s:%s/%s)",
        settings.upload_dir,
        settings.postgres_host,
        settings.postgres_port,
        settings.postgres_db,
    )
    try:
        yield
    finally:
        await shutdown_notifier()
        await DatabasePool.close()


app = FastAPI(
    title="SmartSummary API",
    description="Meeting audio to summarized notes",
    version=__version__,
    lifespan=lifespan,
)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
install_error_handlers(app)

app.include_router(uploads_router)
app.include_router(summaries_router)
app.include_router(notes_router)
app.include_router(health_router)
