"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test health endpoint returns healthy status."""
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data
    assert data["version"] == "0.1.0"
    assert data["llm_enabled"] is False


@pytest.mark.asyncio
async def test_health_reports_llm_key(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test llm_enabled follows the configured key."""
    from api.config import get_settings

    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    get_settings.cache_clear()

    response = await client.get("/health")
    assert response.json()["llm_enabled"] is True


@pytest.mark.asyncio
async def test_root_returns_info(client: AsyncClient) -> None:
    """Test root endpoint returns API info."""
    response = await client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "PageLens API"
    assert data["version"] == "0.1.0"
    assert data["env"] == "test"


@pytest.mark.asyncio
async def test_v1_root(client: AsyncClient) -> None:
    """Test v1 API root endpoint."""
    response = await client.get("/v1/")

    assert response.status_code == 200
    data = response.json()
    assert data["version"] == "1"
    assert data["status"] == "active"


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient) -> None:
    """Test every response carries a request ID."""
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_generated_request_id_and_timing(client: AsyncClient) -> None:
    """Test a request ID is generated when none is sent and timing is exposed."""
    response = await client.get("/health")
    assert len(response.headers["X-Request-ID"]) == 32
    assert float(response.headers["X-Process-Time-Ms"]) >= 0


@pytest.mark.asyncio
async def test_ready(client: AsyncClient, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test readiness reports the result store and LLM state."""
    from api.config import get_settings

    monkeypatch.setenv("RESULTS_PATH", str(tmp_path / "ready"))
    get_settings.cache_clear()

    response = await client.get("/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["results_store"]["status"] == "healthy"
    assert data["checks"]["llm"]["status"] == "disabled"
    assert (tmp_path / "ready").is_dir()
