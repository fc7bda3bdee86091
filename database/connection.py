import logging
import os
from pathlib import Path
from typing import Optional

import asyncpg
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


class PoolSettings(BaseModel):
    """Where the ledger lives and how many connections to keep open.

    A DSN wins over the individual host/port/database/user fields.
    """
    dsn: Optional[str] = None
    host: str = "localhost"
    port: int = 5432
    database: str = "golf_ledger"
    user: str = "postgres"
    password: str = ""
    min_size: int = Field(1, ge=0)
    max_size: int = Field(5, ge=1)

    @classmethod
    def from_env(cls, dsn: Optional[str] = None) -> "PoolSettings":
        """DATABASE_URL, DB_POOL_MIN and DB_POOL_MAX; an explicit dsn overrides the URL."""
        return cls(
            dsn=dsn or os.environ.get("DATABASE_URL") or None,
            min_size=int(os.environ.get("DB_POOL_MIN", 1)),
            max_size=int(os.environ.get("DB_POOL_MAX", 5)),
        )

    def connect_kwargs(self) -> dict:
        if self.dsn:
            kwargs = {"dsn": self.dsn}
        else:
            kwargs = {
                "host": self.host,
                "port": self.port,
                "database": self.database,
                "user": self.user,
                "password": self.password,
            }
        kwargs.update(min_size=self.min_size, max_size=self.max_size)
        return kwargs


class DatabasePool:
    """Owns one asyncpg pool from startup to shutdown.

    Usable directly (``initialize`` / ``close``) or as an async context manager.
    """

    def __init__(self, settings: Optional[PoolSettings] = None):
        self.settings = settings or PoolSettings.from_env()
        self._pool: Optional[asyncpg.Pool] = None

    async def initialize(self) -> None:
        """Open the pool once; later calls are no-ops."""
        if self._pool is not None:
            return
        self._pool = await asyncpg.create_pool(**self.settings.connect_kwargs())
        logger.info(
            "Database pool ready (min=%d, max=%d)",
            self.settings.min_size, self.settings.max_size,
        )

    async def initialize_schema(self, schema_path: Path = SCHEMA_PATH) -> None:
        """Create the ledger schema and rounds table if they do not exist."""
        sql_text = schema_path.read_text(encoding="utf-8")
        async with self.pool.acquire() as conn:
            await conn.execute(sql_text)

    async def close(self) -> None:
        if self._pool is None:
            return
        await self._pool.close()
        self._pool = None
        logger.info("Database pool closed")

    async def __aenter__(self) -> "DatabasePool":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("Database pool is not open; call initialize() first")
        return self._pool

    async def health_check(self) -> bool:
        """True when a connection can run a trivial query."""
        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, RuntimeError):
            logger.warning("Database health check failed", exc_info=True)
            return False
        return True
