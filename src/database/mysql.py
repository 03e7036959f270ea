"""MySQL persistence for generation requests, items and combinations."""

import hashlib
import json
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Sequence

import aiomysql
from aiomysql import Connection, Pool

from src.core.config import settings
from src.generator import combination_key, split_into_chunks
from src.utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS items (
      id BIGINT UNSIGNED AUTO_INCREMENT PRIMARY KEY,
      code VARCHAR(32) NOT NULL UNIQUE,
      prefix VARCHAR(16) NOT NULL,
      idx INT NOT NULL,
      created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
      KEY idx_prefix(prefix)
    ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
    """,
    """
    CREATE TABLE IF NOT EXISTS responses (
      id BIGINT UNSIGNED AUTO_INCREMENT PRIMARY KEY,
      request_json JSON NOT NULL,
      length INT NOT NULL,
      created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
    """,
    """
    CREATE TABLE IF NOT EXISTS combinations (
      id BIGINT UNSIGNED AUTO_INCREMENT PRIMARY KEY,
      response_id BIGINT UNSIGNED NOT NULL,
      combination_hash CHAR(64) NOT NULL,
      combination_key TEXT NOT NULL,
      combination_json JSON NOT NULL,
      created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
      CONSTRAINT fk_combinations_response
        FOREIGN KEY (response_id) REFERENCES responses(id) ON DELETE CASCADE,
      UNIQUE KEY uniq_resp_key (response_id, combination_hash),
      KEY idx_resp (response_id)
    ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
    """,
)


def key_digest(key: str) -> str:
    """Fixed-width SHA-256 hex digest of a combination key."""
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


class CombinationStore:
    """Async MySQL store with connection pooling."""

    def __init__(
        self,
        host: str = settings.MYSQL_HOST,
        port: int = settings.MYSQL_PORT,
        user: str = settings.MYSQL_USER,
        password: str = settings.MYSQL_PASSWORD,
        database: str = settings.MYSQL_DATABASE,
        maxsize: int = settings.MYSQL_POOL_MAXSIZE,
        chunk_size: int = settings.COMBINATION_CHUNK_SIZE,
        charset: str = "utf8mb4",
        pool_recycle: int = 3600,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.maxsize = maxsize
        self.chunk_size = chunk_size
        self.charset = charset
        self.pool_recycle = pool_recycle
        self._pool: Optional[Pool] = None

    async def connect(self) -> None:
        """Initialize the connection pool and create missing tables."""
        try:
            self._pool = await aiomysql.create_pool(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                db=self.database,
                charset=self.charset,
                autocommit=False,
                minsize=1,
                maxsize=self.maxsize,
                pool_recycle=self.pool_recycle,
            )
            logger.info(f"Connected to MySQL database: {self.database}@{self.host}:{self.port}")
        except Exception as e:
            logger.error(f"Failed to connect to MySQL: {e}")
            raise

        await self.ensure_schema()

    async def disconnect(self) -> None:
        """Close the connection pool."""
        if self._pool:
            self._pool.close()
            await self._pool.wait_closed()
            self._pool = None
            logger.info("Disconnected from MySQL database")

    def _require_pool(self) -> Pool:
        if not self._pool:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._pool

    async def ensure_schema(self) -> None:
        """Create the items, responses and combinations tables if missing."""
        pool = self._require_pool()
        conn: Connection = await pool.acquire()
        try:
            for statement in SCHEMA_STATEMENTS:
                await self._execute(conn, statement)
            await conn.commit()
        finally:
            pool.release(conn)

    @asynccontextmanager
    async def transaction(self):
        """
        Run a unit of work on one pooled connection.

        Commits when the block exits cleanly, rolls back and re-raises on any
        exception, and always returns the connection to the pool.
        """
        pool = self._require_pool()
        conn: Connection = await pool.acquire()
        try:
            await conn.begin()
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()
        finally:
            pool.release(conn)

    async def _execute(self, conn: Connection, query: str, params: Any = None):
        cursor = await conn.cursor()
        try:
            await cursor.execute(query, params)
            return cursor
        except Exception as e:
            logger.error(f"Query execution failed: {e}")
            logger.debug(f"Query: {query}")
            raise
        finally:
            await cursor.close()

    async def insert_response(self, conn: Connection, items: Sequence[int], length: int) -> int:
        """Record the original request and return its new identifier."""
        cursor = await self._execute(
            conn,
            "INSERT INTO responses (request_json, length) VALUES (CAST(%s AS JSON), %s)",
            (json.dumps(list(items)), length),
        )
        return cursor.lastrowid

    async def insert_items(self, conn: Connection, groups: Dict[str, List[str]]) -> None:
        """Insert every item code, leaving existing codes untouched."""
        values = []
        for prefix, codes in groups.items():
            for code in codes:
                values.append((code, prefix, int(code[len(prefix):])))
        if not values:
            return

        placeholders = ",".join(["(%s,%s,%s)"] * len(values))
        flat = [value for row in values for value in row]
        await self._execute(
            conn,
            f"INSERT IGNORE INTO items (code, prefix, idx) VALUES {placeholders}",
            flat,
        )

    async def insert_combinations(
        self,
        conn: Connection,
        response_id: int,
        combinations: Sequence[Sequence[str]],
    ) -> None:
        """
        Upsert combinations keyed by (response_id, combination_key) in chunks.

        The unique index is on the SHA-256 digest of the key, so keys of any
        length fit; the full key is kept alongside it.
        """
        for chunk in split_into_chunks(combinations, chunk_size=self.chunk_size):
            values = []
            for c in chunk:
                key = combination_key(c)
                values.append((response_id, key_digest(key), key, json.dumps(list(c))))

            placeholders = ",".join(["(%s,%s,%s,%s)"] * len(values))
            flat = [value for row in values for value in row]
            await self._execute(
                conn,
                "INSERT INTO combinations "
                "(response_id, combination_hash, combination_key, combination_json) "
                f"VALUES {placeholders} "
                "ON DUPLICATE KEY UPDATE combination_json = VALUES(combination_json)",
                flat,
            )
