"""Pytest configuration and fixtures."""

import os

import pytest
from httpx import ASGITransport, AsyncClient
from typing import AsyncGenerator

from config import Config
from tinylink.database import LinkStoreBase, LinkStoreSQLite, get_link_store
from tinylink.service import TinyLinkService
from tinylink.shortcode import ShortCodeGenerator
from tinylink.common.logging_config import setup_logging
from web_app import create_app

POSTGRES_URL = os.getenv("TINYLINK_TEST_POSTGRES_URL")


class FakeRedis:
    """In-memory stand-in for a redis.asyncio client."""

    def __init__(self):
        self.data = {}
        self.fail = False

    def _check(self):
        if self.fail:
            raise ConnectionError("redis down")

    async def get(self, key):
        self._check()
        return self.data.get(key)

    async def setex(self, key, ttl, value):
        self._check()
        self.data[key] = value

    async def delete(self, key):
        self._check()
        return 1 if self.data.pop(key, None) is not None else 0

    async def ping(self):
        self._check()
        return True

    async def aclose(self):
        pass


@pytest.fixture
def fake_redis():
    """In-memory Redis client."""
    return FakeRedis()


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
async def test_db(tmp_path, logger) -> AsyncGenerator[LinkStoreSQLite, None]:
    """SQLite store in a temporary file."""
    db = LinkStoreSQLite(str(tmp_path / "tinylink.db"), logger=logger)
    await db.initialize()

    yield db

    await db.close()


@pytest.fixture(params=["sqlite", "postgres"])
async def any_store(request, tmp_path, logger) -> AsyncGenerator[LinkStoreBase, None]:
    """Each backend family behind the same contract."""
    if request.param == "sqlite":
        db = get_link_store(f"sqlite:///{tmp_path / 'tinylink.db'}", logger=logger)
        await db.initialize()
    else:
        if not POSTGRES_URL:
            pytest.skip("TINYLINK_TEST_POSTGRES_URL not set")
        db = get_link_store(POSTGRES_URL, logger=logger)
        await db.initialize()
        async with db._get_connection() as conn:
            await conn.execute("TRUNCATE links RESTART IDENTITY")

    yield db

    await db.close()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def service(test_db, short_code_generator, logger) -> TinyLinkService:
    """Create service instance."""
    return TinyLinkService(
        db=test_db,
        cache=None,  # No cache for tests
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config():
    return Config(base_url="http://testserver", database_url=None)


@pytest.fixture
def app(test_db, service, config):
    """Create test FastAPI app."""
    return create_app(
        db_instance=test_db,
        cache_instance=None,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
