from contextlib import asynccontextmanager

from fastapi import FastAPI

from servicedesk.infrastructure.database import engine, initialize_database
from servicedesk.interfaces.api.errors import register_exception_handlers
from servicedesk.interfaces.api.routes import register_routes
from servicedesk.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release pooled connections on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Build the notification API application."""

    configure_logging()
    app = FastAPI(title="Service desk notifications", lifespan=lifespan)
    register_exception_handlers(app)
    register_routes(app)
    return app
