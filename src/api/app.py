import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from api.routers import brands
from config import settings
from models import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    logging.basicConfig(level=settings.log_level.upper())
    init_db()
    logger.info(f"Brand connections dataset: {settings.brand_connections_path}")
    yield

app = FastAPI(
    title=settings.app_name,
    description="Assign canonical brands to pharmacy products",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(brands.router, prefix="/api/v1/brands", tags=["brands"])


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}
