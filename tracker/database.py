"""
SQLite connection lifecycle for the plant tracker.

Database is a context manager: entering opens the connection, leaving
commits on success, rolls back on exception, and always closes.
"""

import logging
import sqlite3
from pathlib import Path

log = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


class Database:
    """One transaction against the plant tracker database file."""

    def __init__(self, db_path="plants.db"):
        self.db_path = Path(db_path)
        self._conn = None

    @property
    def connection(self):
        """
        The open connection.

        Raises
        ------
        RuntimeError
            If used outside a ``with Database(...)`` block.
        """
        if self._conn is None:
            raise RuntimeError(
                "Database must be used as a context manager: "
                "with Database(path) as db: ...")
        return self._conn

    def __enter__(self):
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self.db_path))
        self._conn.row_factory = sqlite3.Row
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()
            self._conn = None

    def init_schema(self):
        """Create the plants table if it does not exist yet."""
        self.connection.executescript(SCHEMA_PATH.read_text(encoding="utf-8"))


def init_db(db_path):
    """Create the schema in the database file at db_path."""
    with Database(db_path) as db:
        db.init_schema()
    log.info("Initialized plant database at %s", db_path)
