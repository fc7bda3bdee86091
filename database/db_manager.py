"""Bundles the repositories that share one asyncpg pool."""

import asyncpg

from database.repositories.round_repo import RoundRepositoryDB


class DatabaseManager:
    """Entry point for data access: ``DatabaseManager(pool).rounds``."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool
        self.rounds = RoundRepositoryDB(pool)
