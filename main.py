from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from expense_tracker.config import get_settings
from expense_tracker.infrastructure.database import engine, initialize_database
from expense_tracker.interfaces.api.error_handlers import setup_error_handlers
from expense_tracker.interfaces.api.routes import register_routes

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed defaults on startup, release connections on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="Expense Tracker API", lifespan=lifespan)

    # Session cookies are sent cross-origin by the web client.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_error_handlers(app)
    register_routes(app)
    return app


app = create_app()
