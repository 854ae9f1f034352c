"""StayBook: FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from staybook.api.v1.analytics import router as analytics_router
from staybook.api.v1.auth import router as auth_router
from staybook.api.v1.bookings import router as bookings_router
from staybook.api.v1.images import router as images_router
from staybook.api.v1.invoices import router as invoices_router
from staybook.api.v1.occupancy import router as occupancy_router
from staybook.config import settings

# Configure root logger so all staybook.* loggers output to stderr.
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create missing tables on startup and dispose the engine on shutdown."""
    import staybook.models  # noqa: F401  registers the tables on Base.metadata
    from staybook.database import Base, engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Booking manager for short-stay rooms: bookings, occupancy calendar, analytics and invoices.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth_router)
app.include_router(bookings_router)
app.include_router(analytics_router)
app.include_router(occupancy_router)
app.include_router(invoices_router)
app.include_router(images_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
