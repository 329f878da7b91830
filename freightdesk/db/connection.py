import sqlite3
from pathlib import Path
from contextlib import contextmanager

from freightdesk.config import get_settings

DB_PATH = Path(get_settings().database_path)


def connect() -> sqlite3.Connection:
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    # Transactions are opened explicitly by get_db()
    conn = sqlite3.connect(str(DB_PATH), isolation_level=None)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


@contextmanager
def get_db():
    """One atomic unit of work.

    Takes the write lock up front (BEGIN IMMEDIATE) so a read-then-write
    inside the block cannot interleave with another writer. Commits on a
    clean exit, rolls back everything on any exception.
    """
    conn = connect()
    try:
        conn.execute("BEGIN IMMEDIATE")
        try:
            yield conn
        except BaseException:
            conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")
    finally:
        conn.close()
