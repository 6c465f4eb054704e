"""
Store bootstrapper: owns the shared aiosqlite connection.

The first call to `connection()` opens the database, creates the schema,
seeds sample rows and ensures a default favorite. Concurrent callers wait
on the same initialization task. A failed initialization is not kept, so
the next call starts over.

File: database/store.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""

import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional, Union

import aiosqlite

from ..errors import SchemaError, StoreOpenError
from .common import LOCAL_DB_PATH, now_ms
from .create_tables import create_contacts_table, ensure_default_favorite, seed_initial_contacts

log = logging.getLogger(__name__)


class ContactStore:
    """
    Lazily-initialized handle to the contacts database.
    """

    def __init__(
        self,
        db_path: Union[str, Path] = LOCAL_DB_PATH,
        clock: Callable[[], int] = now_ms,
    ):
        """
        Args:
            db_path: SQLite file to open (parent directories are created)
            clock: Millisecond clock used for seed timestamps
        """
        self.db_path = Path(db_path)
        self._clock = clock
        self._conn: Optional[aiosqlite.Connection] = None
        self._init_task: Optional[asyncio.Task] = None
        self._bootstrap_count = 0

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def bootstrap_count(self) -> int:
        """Number of initialization attempts started so far."""
        return self._bootstrap_count

    async def connection(self) -> aiosqlite.Connection:
        """
        Return the shared connection, initializing it on first use.

        Raises:
            StoreOpenError: If the database file cannot be opened
            SchemaError: If creating or seeding the table fails
        """
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(self._bootstrap())
        task = self._init_task
        try:
            return await asyncio.shield(task)
        except Exception:
            # Forget the failed attempt so the next caller retries
            if self._init_task is task:
                self._init_task = None
            raise

    async def _bootstrap(self) -> aiosqlite.Connection:
        self._bootstrap_count += 1
        log.info(f"Opening contact database at {self.db_path}")

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = await aiosqlite.connect(self.db_path)
        except (OSError, aiosqlite.Error) as e:
            log.error(f"Could not open contact database: {e}")
            raise StoreOpenError(f"Could not open contact database at {self.db_path}: {e}") from e

        try:
            await create_contacts_table(conn)
            await seed_initial_contacts(conn, self._clock())
            await ensure_default_favorite(conn)
        except aiosqlite.Error as e:
            log.error(f"Contact table setup failed: {e}")
            await conn.close()
            raise SchemaError(f"Could not prepare contacts table: {e}") from e

        self._conn = conn
        log.info("Contact database ready")
        return conn

    async def close(self) -> None:
        """Close the connection. A later `connection()` call reopens it."""
        task = self._init_task
        self._init_task = None
        conn = self._conn
        if task is not None:
            # Wait out an in-flight bootstrap so its connection is closed here
            await asyncio.wait([task])
            if not task.cancelled() and task.exception() is None:
                conn = task.result()
        self._conn = None
        if conn is not None:
            await conn.close()
            log.info("Contact database closed")

    async def __aenter__(self) -> "ContactStore":
        await self.connection()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
