from database.connection import DatabasePool, PoolSettings
from database.db_manager import DatabaseManager
from database.repositories import RoundRepositoryDB
from database.exceptions import DatabaseError, NotFoundError, IntegrityError

__all__ = [
    "DatabasePool",
    "PoolSettings",
    "DatabaseManager",
    "RoundRepositoryDB",
    "DatabaseError",
    "NotFoundError",
    "IntegrityError",
]
