# agroquote/data_access/database_manager.py

import sqlite3
import logging
from agroquote.config import DATABASE_PATH

logger = logging.getLogger(__name__)

# Money and quantities are REAL; repositories turn them back into Decimal.
SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS products (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE,
        standard_unit TEXT NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS stores (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL UNIQUE,
        address TEXT NOT NULL UNIQUE,
        phone TEXT UNIQUE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS quotes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        product_id INTEGER NOT NULL REFERENCES products(id) ON UPDATE CASCADE ON DELETE RESTRICT,
        store_id INTEGER NOT NULL REFERENCES stores(id) ON UPDATE CASCADE ON DELETE RESTRICT,
        price REAL NOT NULL CHECK(price > 0),
        packaging_size REAL NOT NULL CHECK(packaging_size > 0),
        packaging_unit TEXT NOT NULL,
        conversion_factor REAL NOT NULL DEFAULT 1.0 CHECK(conversion_factor > 0),
        quote_date TEXT NOT NULL -- YYYY-MM-DD
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_quotes_product_date ON quotes (product_id, quote_date);",
    """
    CREATE TABLE IF NOT EXISTS prescriptions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        product_id INTEGER NOT NULL REFERENCES products(id) ON UPDATE CASCADE ON DELETE RESTRICT,
        required_quantity REAL NOT NULL CHECK(required_quantity > 0),
        required_unit TEXT NOT NULL
    );
    """,
]


class DatabaseManager:
    """
    Opens a short-lived SQLite connection per call. Used as a context manager
    it yields that connection with name-indexed rows and foreign keys on.
    """

    def __init__(self, db_path=DATABASE_PATH):
        self.db_path = db_path
        self.conn = None

    def __enter__(self) -> sqlite3.Connection:
        try:
            self.conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            logger.error(f"Could not open database {self.db_path}: {e}")
            raise
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys = ON;")
        logger.debug(f"Opened connection to {self.db_path}")
        return self.conn

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.conn is None:
            return
        if exc_type is not None:
            self.conn.rollback()
        self.conn.close()
        self.conn = None
        logger.debug("Connection closed.")

    def _run(self, action: str, query, params, handle):
        try:
            with self as conn:
                cursor = conn.execute(query, params or ())
                return handle(conn, cursor)
        except sqlite3.Error as e:
            logger.error(f"{action} failed: {' '.join(query.split())} with params {params} - {e}")
            raise

    def execute_query(self, query, params=None) -> sqlite3.Cursor:
        def commit(conn, cursor):
            conn.commit()
            return cursor
        return self._run("Write", query, params, commit)

    def fetch_one(self, query, params=None):
        return self._run("Fetch one", query, params, lambda conn, cursor: cursor.fetchone())

    def fetch_all(self, query, params=None):
        return self._run("Fetch all", query, params, lambda conn, cursor: cursor.fetchall())

    def create_tables(self):
        """Creates the schema if missing. Safe to call on every start."""
        with self as conn:
            for position, statement in enumerate(SCHEMA, start=1):
                try:
                    conn.execute(statement)
                except sqlite3.Error as e:
                    logger.error(f"Schema statement {position}/{len(SCHEMA)} failed: {e}\n{statement.strip()[:200]}",
                                 exc_info=True)
                    raise
            conn.commit()
        logger.info(f"Schema ready in {self.db_path} ({len(SCHEMA)} statements).")
