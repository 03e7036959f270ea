"""FastAPI application for the Combinations API."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api.routes import generator_router
from src.core.config import settings
from src.database import CombinationStore
from src.utils.logger import get_logger, setup_logging

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the MySQL store on startup and close it on shutdown."""
    store = CombinationStore()
    await store.connect()
    app.state.store = store
    try:
        yield
    finally:
        await store.disconnect()


# Create FastAPI app
app = FastAPI(
    title="Combinations API",
    description="""
    Generate item combinations across groups.

    ## Workflow

    1. Send group sizes as `items`, e.g. `[1, 2, 1]` for groups A, B and C
    2. Use `/generate/count` to see how many combinations a request yields
    3. Use `/generate` to produce and store every combination of `length` items
       taken from distinct groups

    Each stored request gets an `id` returned with its combinations.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Include routers
app.include_router(generator_router)


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
