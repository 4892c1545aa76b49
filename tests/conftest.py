"""Test fixtures for brand mapping and API tests."""

import json
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool
import sys
from pathlib import Path
import os


def ensure_src_on_path() -> None:
    root = Path(__file__).resolve().parent.parent
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.append(str(src_path))


ensure_src_on_path()

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")
os.environ.setdefault("RUN_TASKS_INLINE", "true")

from api.routers import brands
from config import settings
from models import Base, get_db
from services.brand_mapping import BrandRelationship, build_brand_graph
from services.datasets import clear_brand_graph_cache


@pytest.fixture(scope="function")
def db_engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    connection = db_engine.connect()
    transaction = connection.begin()
    session = Session(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def brand_connections():
    return [
        {"manufacturer_p1": "Bayer", "manufacturers_p2": "Aspirin; BayerCare"},
        {"manufacturer_p1": "Neox", "manufacturers_p2": "Neox"},
        {"manufacturer_p1": "Heel", "manufacturers_p2": "Traumeel"},
        {"manufacturer_p1": "Rich", "manufacturers_p2": "Rich"},
    ]


@pytest.fixture
def pharmacy_items():
    return [
        {"title": "Bayer Aspirin 100mg", "source_id": "1001"},
        {"title": "NEOXIMED TABLET", "source_id": "1002"},
        {"title": "ARNICA HEEL GEL", "source_id": "1003"},
        {"title": "VERY RICH CREAM", "source_id": "1004"},
        {"title": "BIO", "source_id": "1005"},
        {"title": "Traumeel S 50g", "source_id": "1006", "m_id": "existing-mapping"},
    ]


@pytest.fixture
def brand_graph(brand_connections):
    return build_brand_graph(
        BrandRelationship(row["manufacturer_p1"], row["manufacturers_p2"]) for row in brand_connections
    )


@pytest.fixture
def dataset_files(tmp_path, monkeypatch, brand_connections, pharmacy_items):
    connections_path = tmp_path / "brandConnections.json"
    items_path = tmp_path / "pharmacyItems.json"
    connections_path.write_text(json.dumps(brand_connections), encoding="utf-8")
    items_path.write_text(json.dumps(pharmacy_items), encoding="utf-8")

    monkeypatch.setattr(settings, "brand_connections_path", str(connections_path))
    monkeypatch.setattr(settings, "pharmacy_items_path", str(items_path))
    clear_brand_graph_cache()
    yield connections_path, items_path
    clear_brand_graph_cache()


@pytest.fixture(scope="function")
def test_app():
    @asynccontextmanager
    async def test_lifespan(app: FastAPI) -> AsyncGenerator:
        yield

    app = FastAPI(
        title="PharmaBrands Test",
        description="Assign canonical brands to pharmacy products",
        version="0.1.0",
        lifespan=test_lifespan,
    )

    app.include_router(brands.router, prefix="/api/v1/brands", tags=["brands"])

    @app.get("/")
    async def root():
        return {
            "name": "PharmaBrands",
            "version": "0.1.0",
            "status": "running",
        }

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


@pytest.fixture(scope="function")
def client(db_session: Session, test_app: FastAPI):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    test_app.dependency_overrides[get_db] = override_get_db
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()
