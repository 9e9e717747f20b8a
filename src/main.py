import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from alembic.config import Config
from alembic import command

from src.db import Database
from src.core import Settings, get_settings
from src.core.exceptions import register_exception_handlers
from src.core.middleware import RequestLoggingMiddleware
from src.api.v1 import build_api_router
from src.logs.server_log import api_logger

ALEMBIC_INI = Path(__file__).parent.parent / "alembic.ini"


def run_migrations(database_url: str) -> None:
    """Apply Alembic migrations up to head"""
    alembic_cfg = Config(str(ALEMBIC_INI))
    # configparser interpolates '%', URL-encoded passwords must be escaped
    alembic_cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    command.upgrade(alembic_cfg, "head")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    try:
        if settings.RUN_MIGRATIONS:
            # env.py runs its own event loop, keep it off the server loop
            await asyncio.to_thread(run_migrations, settings.DATABASE_URL)

        database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
        await database.create_all()
        app.state.db = database
        api_logger.info("Database migrations applied and initialized successfully")
    except Exception as e:
        api_logger.error(f"Error initializing database: {e}")
        raise

    yield

    await app.state.db.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="API for flashcards and tags",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=3600,
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)
    app.include_router(build_api_router(settings.API_PREFIX))

    @app.get("/")
    async def root(request: Request):
        """Health check endpoint"""
        api_logger.info(f"Received health check request: {request.method} {request.url}")
        return {"message": f"{settings.PROJECT_NAME} is running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    api_logger.info(f"Starting server on http://{settings.HOST}:{settings.PORT}")

    uvicorn.run(
        "src.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
