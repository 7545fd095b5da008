import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

# Register all models with Base.metadata
import cricketcoach.models  # noqa: F401
from cricketcoach.api.routes.availability import router as availability_router
from cricketcoach.api.routes.bookings import router as bookings_router
from cricketcoach.api.routes.coaches import router as coaches_router
from cricketcoach.api.routes.overrides import router as overrides_router
from cricketcoach.api.routes.schedules import router as schedules_router
from cricketcoach.config import get_settings
from cricketcoach.database import Base, engine
from cricketcoach.schemas.system import StatusResponse


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logging.basicConfig(level=get_settings().log_level.upper())
    # Create tables on startup (dev convenience; Alembic for production)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="CricketCoach",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.include_router(coaches_router)
    app.include_router(schedules_router)
    app.include_router(availability_router)
    app.include_router(overrides_router)
    app.include_router(bookings_router)

    @app.get("/api/system/status", response_model=StatusResponse)
    async def system_status() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
