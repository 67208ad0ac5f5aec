"""
EasyBuild Content API - Database Connection Management
========================================================

What:  The process-wide MongoDB handle (`ConnectionCache`) and the FastAPI
       dependency that hands it to route handlers.
How:   The application factory builds one ConnectionCache and stores it on
       `app.state.connections`. The lifespan warms it up at startup and
       closes it at shutdown. Every request awaits `acquire()`, which returns
       the cached handle or joins the connection attempt already in flight.
Who:   Route handlers via `Depends(get_database)`, the health check, and the
       lifespan in main.py.

Connection Lifecycle:
    acquire() ──▶ cached? ──yes──▶ return handle
                    │ no
                    ▼
              attempt in flight? ──yes──▶ await the same attempt
                    │ no
                    ▼
              start attempt (client + ping)
                    ├── success ──▶ cache handle, clear pending slot
                    └── failure ──▶ clear pending slot, close client, raise

Pool Configuration (see Settings.pool_options):
    maxPoolSize / minPoolSize:  sockets shared by all concurrent requests
    serverSelectionTimeoutMS:   how long a ping waits for a reachable server
    socketTimeoutMS:            upper bound of a single round trip
"""

import asyncio
import logging
import re
from typing import Any, Callable, Dict, Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from easybuild.config import Settings
from easybuild.exceptions import ConfigurationError, DatabaseConnectionError

logger = logging.getLogger(__name__)

# user:password@ part of a mongodb:// or mongodb+srv:// connection string
_CREDENTIALS_PATTERN = re.compile(r"(mongodb(?:\+srv)?://)[^@/\s]+@", re.IGNORECASE)


def redact_credentials(text: str) -> str:
    """Replaces the credentials of any MongoDB URI inside `text` with ***."""
    return _CREDENTIALS_PATTERN.sub(r"\1***@", text)


class ConnectionCache:
    """
    Lazily connects to MongoDB once and shares the handle.

    Concurrency:
        All state changes happen on the event loop thread, so no lock is
        needed. Concurrent callers that arrive while the first attempt is
        running await the same task; the task is shielded so a cancelled
        request does not abort the attempt for everyone else.

    Failure:
        The attempt clears its own pending slot before the error reaches any
        waiter, so the next `acquire()` starts a new attempt instead of
        replaying the cached failure.
    """

    def __init__(
        self,
        uri: Optional[str],
        db_name: str,
        pool_options: Optional[Dict[str, Any]] = None,
        client_factory: Callable[..., Any] = AsyncMongoClient,
    ):
        self.uri = uri
        self.db_name = db_name
        self.pool_options = dict(pool_options or {})
        self._client_factory = client_factory
        self._client: Optional[Any] = None
        self._database: Optional[AsyncDatabase] = None
        self._pending: Optional["asyncio.Task[AsyncDatabase]"] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectionCache":
        return cls(
            uri=settings.mongodb_uri,
            db_name=settings.mongodb_db_name,
            pool_options=settings.pool_options,
        )

    @property
    def is_connected(self) -> bool:
        return self._database is not None

    async def acquire(self) -> AsyncDatabase:
        """
        Returns the shared database handle, connecting on first use.

        Raises:
            ConfigurationError: no connection URI is configured
            DatabaseConnectionError: the attempt timed out or was refused
        """
        if self._database is not None:
            return self._database

        if not self.uri:
            raise ConfigurationError(
                message="Database connection is not configured (MONGODB_URI is missing)",
                setting="MONGODB_URI",
            )

        if self._pending is None:
            logger.info("Connecting to MongoDB database '%s'", self.db_name)
            self._pending = asyncio.ensure_future(self._connect())

        return await asyncio.shield(self._pending)

    async def _connect(self) -> AsyncDatabase:
        client = None
        try:
            client = self._client_factory(self.uri, **self.pool_options)
            await client.admin.command("ping")
        except PyMongoError as exc:
            detail = redact_credentials(str(exc))
            logger.error("MongoDB connection attempt failed: %s", detail)
            raise DatabaseConnectionError(
                context={"error_type": type(exc).__name__, "detail": detail},
            ) from exc
        else:
            self._client = client
            self._database = client[self.db_name]
            logger.info("MongoDB connection established")
            return self._database
        finally:
            self._pending = None
            if self._database is None and client is not None:
                await client.close()

    async def close(self) -> None:
        """
        What:  Cancels an in-flight attempt and closes the pooled client.
        When:  Application shutdown. A later `acquire()` reconnects.
        """
        pending = self._pending
        if pending is not None and not pending.done():
            pending.cancel()
            try:
                await pending
            except (asyncio.CancelledError, DatabaseConnectionError):
                pass
        self._pending = None

        client = self._client
        self._client = None
        self._database = None
        if client is not None:
            await client.close()
            logger.info("MongoDB connection closed")


# ── Request Dependency ────────────────────────────────────────────────────
async def get_database(request: Request) -> AsyncDatabase:
    """
    FastAPI dependency that provides the shared database handle.

    Example usage in a route:
        @router.get("/content/{content_type}")
        async def read(db: AsyncDatabase = Depends(get_database)):
            ...

    Raises:
        ConfigurationError / DatabaseConnectionError, turned into the 500
        envelope by the global exception handlers.
    """
    connections: ConnectionCache = request.app.state.connections
    return await connections.acquire()
