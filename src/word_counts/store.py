"""Key-value stores backing the word counter.

Only the operations the aggregator needs are exposed: atomic increment,
point and multi reads, prefix listing and flush.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Protocol

from sqlalchemy import BigInteger, Column, MetaData, String, Table, create_engine, delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from common.config import StoreConfig
from common.errors import StoreError

logger = logging.getLogger(__name__)

metadata = MetaData()

word_counts_table = Table(
    "word_counts",
    metadata,
    Column("key", String(255), primary_key=True),
    Column("value", BigInteger, nullable=False),
)

KEY_COLUMN = word_counts_table.c["key"]
VALUE_COLUMN = word_counts_table.c["value"]

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class KeyValueStore(Protocol):
    def incrby(self, key: str, amount: int) -> int: ...

    def get(self, key: str) -> int | None: ...

    def keys(self, prefix: str) -> list[str]: ...

    def mget(self, keys: list[str]) -> list[int | None]: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...


class MemoryStore:
    """In-process store guarded by a lock."""

    def __init__(self) -> None:
        self._data: dict[str, int] = {}
        self._lock = threading.Lock()

    def incrby(self, key: str, amount: int) -> int:
        with self._lock:
            value = self._data.get(key, 0) + amount
            self._data[key] = value
            return value

    def get(self, key: str) -> int | None:
        with self._lock:
            return self._data.get(key)

    def keys(self, prefix: str) -> list[str]:
        with self._lock:
            return [key for key in self._data if key.startswith(prefix)]

    def mget(self, keys: list[str]) -> list[int | None]:
        with self._lock:
            return [self._data.get(key) for key in keys]

    def flush(self) -> None:
        with self._lock:
            self._data.clear()

    def close(self) -> None:
        pass


# Process-wide store behind every backend="memory" handle
_memory_store = MemoryStore()


class SQLStore:
    """Store over a single SQL table, PostgreSQL in production and SQLite locally."""

    def __init__(self, engine: Engine) -> None:
        dialect = engine.dialect.name
        if dialect not in _UPSERT_DIALECTS:
            raise StoreError(f"Unsupported database dialect for word counts: {dialect}")
        self._engine = engine
        self._insert = _UPSERT_DIALECTS[dialect]
        try:
            metadata.create_all(engine)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to prepare word count table: {e}") from e

    @classmethod
    def from_url(cls, url: str) -> "SQLStore":
        return cls(create_engine(url))

    def incrby(self, key: str, amount: int) -> int:
        stmt = self._insert(word_counts_table).values(key=key, value=amount)
        stmt = stmt.on_conflict_do_update(
            index_elements=[KEY_COLUMN],
            set_={"value": VALUE_COLUMN + stmt.excluded["value"]},
        ).returning(VALUE_COLUMN)
        try:
            with self._engine.begin() as conn:
                return int(conn.execute(stmt).scalar_one())
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to increment {key}: {e}") from e

    def get(self, key: str) -> int | None:
        stmt = select(VALUE_COLUMN).where(KEY_COLUMN == key)
        try:
            with self._engine.connect() as conn:
                value = conn.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read {key}: {e}") from e
        return None if value is None else int(value)

    def keys(self, prefix: str) -> list[str]:
        stmt = select(KEY_COLUMN).where(
            KEY_COLUMN.startswith(prefix, autoescape=True)
        )
        try:
            with self._engine.connect() as conn:
                return list(conn.execute(stmt).scalars())
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list keys with prefix {prefix}: {e}") from e

    def mget(self, keys: list[str]) -> list[int | None]:
        if not keys:
            return []
        stmt = select(KEY_COLUMN, VALUE_COLUMN).where(
            KEY_COLUMN.in_(keys)
        )
        try:
            with self._engine.connect() as conn:
                found = {key: int(value) for key, value in conn.execute(stmt)}
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read {len(keys)} keys: {e}") from e
        return [found.get(key) for key in keys]

    def flush(self) -> None:
        try:
            with self._engine.begin() as conn:
                deleted = conn.execute(delete(word_counts_table)).rowcount or 0
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to flush word counts: {e}") from e
        logger.info("Deleted %d word count rows", deleted)

    def close(self) -> None:
        self._engine.dispose()


def create_store(config: StoreConfig) -> KeyValueStore:
    """Build the store backend named in config.

    The memory backend is a single instance shared for the life of the process.
    """
    if config.backend == "memory":
        return _memory_store
    if config.backend == "sql":
        try:
            return SQLStore.from_url(config.url)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to connect to word count store: {e}") from e
    raise StoreError(f"Unknown store backend: {config.backend}")


@contextmanager
def open_store(config: StoreConfig) -> Iterator[KeyValueStore]:
    """Context manager for a store handle, closed on every exit path."""
    store = create_store(config)
    try:
        yield store
    finally:
        store.close()
