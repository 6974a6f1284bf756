# account_api/main.py
from contextlib import asynccontextmanager
import logging
import os

import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi import FastAPI

from account_api.core.config import Settings, get_settings
from account_api.core.errors import register_exception_handlers
from account_api.database import build_engine, create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from account_api.models import user as _user_models  # noqa: F401

# Routers
from account_api.routers.users import router as users_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables on the app engine.

    Shutdown:
      - Dispose the engine pool.
    """
    logger.info("Startup: creating tables...")
    try:
        create_db_and_tables(app.state.engine)
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise
    yield
    app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the API.

    The engine is built from `settings.DATABASE_URL`; both live on
    `app.state` for the request dependencies.

    Order matters: API routes are registered before the static mount so
    "/" (static) never shadows "/api/...".
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )

    # Per-app configuration: dependencies read these from request.app.state.
    app.state.settings = settings
    app.state.engine = build_engine(settings.DATABASE_URL)

    if not settings.JWT_SECRET:
        logger.warning("JWT_SECRET is not set; login and /user will fail.")

    # --- CORS configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept"],
    )

    register_exception_handlers(app)

    app.include_router(users_router, prefix=settings.API_PREFIX)

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "ok", "service": "account-api"}

    if settings.STATIC_DIR and os.path.isdir(settings.STATIC_DIR):
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve `app` with uvicorn."""
    settings = get_settings()
    uvicorn.run("account_api.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
