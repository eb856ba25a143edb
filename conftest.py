"""
Shared pytest fixtures.

DATABASE_URL must point at a throwaway SQLite file before any `apps` module
is imported, since the engine is created at import time.
"""
import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="portfolio-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ.setdefault("ENVIRONMENT", "test")

import httpx
import pytest
from fastapi.testclient import TestClient

from apps.shared.database import Base, SessionLocal, engine
from apps.portfolio.main import app
from apps.portfolio.client import PortfolioClient


@pytest.fixture(autouse=True)
def clean_tables():
    """Every test starts from empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def api_client():
    """PortfolioClient talking to the app in-process."""
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
    async with PortfolioClient(http=http) as portfolio_client:
        yield portfolio_client


def make_project_payload(title="Complex Title! 123", **overrides):
    payload = {
        "title": title,
        "description": "A test project",
        "content": "# Heading\n\n- item",
        "category": "WEB",
        "techStack": ["Python", "FastAPI"],
        "githubUrl": "https://github.com/example/test",
        "featured": False,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def project_payload():
    return make_project_payload
