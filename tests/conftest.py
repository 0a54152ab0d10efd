"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator, Generator
from datetime import UTC, datetime

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment before any app code runs
os.environ["ENV"] = "test"
os.environ.pop("ANTHROPIC_API_KEY", None)
os.environ.pop("OPENAI_API_KEY", None)

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    """Re-read settings for every test so env changes do not leak."""
    from api.config import get_settings
    from api.deps import get_enhancer

    get_settings.cache_clear()
    get_enhancer.cache_clear()
    yield
    get_settings.cache_clear()
    get_enhancer.cache_clear()


@pytest.fixture
def now() -> datetime:
    """Fixed analysis time."""
    return FIXED_NOW


@pytest.fixture
def store(tmp_path):
    """Result store in a temporary directory."""
    from analyzer.storage import ResultStore

    return ResultStore(tmp_path / "results", index_limit=5)


@pytest.fixture
async def client(store) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client backed by the temporary store."""
    from api.deps import get_store
    from api.main import app

    app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
