from contextlib import contextmanager
from typing import Iterator
import logging
import os

import psycopg
from psycopg import Connection
from psycopg_pool import ConnectionPool
from dotenv import load_dotenv

from page_analyzer.common.config import settings
from page_analyzer.common.errors import StorageError

load_dotenv()

logger = logging.getLogger(__name__)


def _conninfo() -> str:
    if url := os.environ.get("DATABASE_URL"):
        return url

    user = os.environ["POSTGRES_USER"]
    password = os.environ["POSTGRES_PASSWORD"]
    db = os.environ["POSTGRES_DB"]
    host = os.environ["POSTGRES_HOST"]
    port = os.environ["POSTGRES_PORT"]

    return f"postgresql://{user}:{password}@{host}:{port}/{db}"


class Database:
    """Storage handle shared by the repositories.

    Every repository call takes its own connection from the pool through
    ``connection()``; the scope commits on success and rolls back otherwise.
    Driver errors leave this class as ``StorageError``.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    @classmethod
    def connect(cls, conninfo: str | None = None) -> "Database":
        pool = ConnectionPool(
            conninfo or _conninfo(),
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            open=False,
        )
        pool.open()
        logger.info(
            "database pool opened min_size=%s max_size=%s",
            settings.db_pool_min_size, settings.db_pool_max_size,
        )
        return cls(pool)

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        try:
            with self._pool.connection() as conn:
                yield conn
        except psycopg.Error as exc:
            raise StorageError(str(exc)) from exc

    def close(self) -> None:
        self._pool.close()
        logger.info("database pool closed")
