"""
EasyBuild Content API - Startup and Middleware Tests
======================================================

What:  Tests for the connection warm-up, index bootstrap and the write
       rate limiter.
"""

import pytest
from httpx import AsyncClient, ASGITransport

from easybuild.config import settings
from easybuild.exceptions import ConfigurationError, DatabaseConnectionError
from easybuild.indexes import ensure_indexes, index_models
from easybuild.main import create_app, warm_up_database
from easybuild.models.content import CONTENT_TYPES


class FlakyConnections:
    """Fails the first `failures` acquire() calls."""

    def __init__(self, db, failures):
        self.db = db
        self.failures = failures
        self.calls = 0

    async def acquire(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise DatabaseConnectionError()
        return self.db


class TestWarmUp:

    @pytest.mark.asyncio
    async def test_connects_on_first_try(self, fake_connections):
        assert await warm_up_database(fake_connections) is True

    @pytest.mark.asyncio
    async def test_retries_connection_errors(self, fake_db, monkeypatch):
        monkeypatch.setattr(settings, "warmup_max_attempts", 3)
        monkeypatch.setattr(settings, "warmup_min_wait", 0)
        monkeypatch.setattr(settings, "warmup_max_wait", 0)
        connections = FlakyConnections(fake_db, failures=2)

        assert await warm_up_database(connections) is True
        assert connections.calls == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, fake_db, monkeypatch):
        monkeypatch.setattr(settings, "warmup_max_attempts", 2)
        monkeypatch.setattr(settings, "warmup_min_wait", 0)
        monkeypatch.setattr(settings, "warmup_max_wait", 0)
        connections = FlakyConnections(fake_db, failures=5)

        assert await warm_up_database(connections) is False
        assert connections.calls == 2

    @pytest.mark.asyncio
    async def test_missing_configuration_is_not_retried(self, fake_connections):
        fake_connections.error = ConfigurationError()
        assert await warm_up_database(fake_connections) is False


class TestIndexes:

    def test_social_media_platform_is_unique(self):
        models = index_models("socialmedias")
        unique = [m.document for m in models if m.document.get("unique")]
        assert len(unique) == 1
        assert list(unique[0]["key"].keys()) == ["platform"]

    @pytest.mark.asyncio
    async def test_creates_indexes_for_every_collection(self, fake_db):
        await ensure_indexes(fake_db)

        for content_type in CONTENT_TYPES.values():
            assert fake_db[content_type.collection].indexes

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_other_collections(self, fake_db):
        fake_db["banners"].fail_on.add("create_indexes")

        await ensure_indexes(fake_db)

        assert fake_db["banners"].indexes == []
        assert fake_db["woods"].indexes


class TestRateLimit:

    @pytest.mark.asyncio
    async def test_writes_are_limited_reads_are_not(self, fake_connections, monkeypatch):
        monkeypatch.setattr(settings, "rate_limit_requests", 2)
        app = create_app(connections=fake_connections)
        link = {"icon": "x", "url": "https://example.com"}

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            for platform in ("a", "b"):
                response = await client.post("/content/social-media", json={**link, "platform": platform})
                assert response.status_code == 201

            limited = await client.post("/content/social-media", json={**link, "platform": "c"})
            read = await client.get("/content/social-media")

        assert limited.status_code == 429
        assert limited.json()["error"] == "rate_limit_exceeded"
        assert int(limited.headers["Retry-After"]) > 0
        assert read.status_code == 200
