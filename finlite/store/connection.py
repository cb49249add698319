"""SQLite connection handling shared by every collection."""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from finlite.domain.errors import StorageError

logger = logging.getLogger(__name__)

# Seconds a connection waits on a locked database before failing
BUSY_TIMEOUT = 30.0


@contextmanager
def connect(db_path: Path, write: bool = False) -> Iterator[sqlite3.Connection]:
    """Open a connection and run the block inside one transaction.

    Reads run in a deferred transaction so multi-statement reads see a
    single snapshot. Writes take the write lock up front (BEGIN IMMEDIATE),
    which serializes concurrent writers.

    Args:
        db_path: Path to the database file.
        write: Whether the block modifies the database.

    Yields:
        Connection with row_factory configured.

    Raises:
        StorageError: If any sqlite3 operation fails. The transaction is
            rolled back first.
    """
    try:
        conn = sqlite3.connect(db_path, timeout=BUSY_TIMEOUT, isolation_level=None)
    except sqlite3.Error as e:
        logger.error("Could not open database %s: %s", db_path, e)
        raise StorageError(f"Could not open database {db_path}: {e}") from e

    conn.row_factory = sqlite3.Row
    try:
        conn.execute("PRAGMA foreign_keys = ON")
        conn.execute("BEGIN IMMEDIATE" if write else "BEGIN")
        yield conn
        conn.execute("COMMIT")
    except (sqlite3.Error, OverflowError) as e:
        # OverflowError: an integer parameter does not fit in SQLite INTEGER
        if conn.in_transaction:
            conn.rollback()
        logger.error("Database error on %s: %s", db_path, e)
        raise StorageError(f"Database error: {e}") from e
    except BaseException:
        if conn.in_transaction:
            conn.rollback()
        raise
    finally:
        conn.close()
