"""
Database support functions.
None of the other modules deal directly with the file system: the catalog
database path and the SQLite settings all live in this single file.

Values are stored as JSON text so the catalog file can be inspected and
produced by other tools.
"""

import json
import os
import re
import sqlite3
import time

import config

# -----------------------------------------------------------------------------
# SQLite configuration (from centralized settings)


def _db_timeout() -> int:
    return int(config.settings.db.timeout)


def _db_max_retries() -> int:
    return max(1, int(config.settings.db.max_retries))


def _db_retry_base_sleep() -> float:
    return float(config.settings.db.retry_base_sleep)


def _init_connection(conn: sqlite3.Connection, enable_wal: bool = False):
    """Initialize connection with settings suited to many readers and one writer."""
    conn.execute(f"PRAGMA busy_timeout={_db_timeout() * 1000}")  # milliseconds
    conn.execute("PRAGMA synchronous=NORMAL")
    if enable_wal:
        try:
            conn.execute("PRAGMA journal_mode=WAL")
        except sqlite3.OperationalError:
            # Another process may hold the lock; busy_timeout + retries still apply.
            pass


# -----------------------------------------------------------------------------
# Native SQLite dict-like wrapper


# Valid table name pattern to prevent SQL injection
_VALID_TABLENAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class SqliteKV:
    """
    A dict-like interface over a SQLite table with (key TEXT, value TEXT).
    Values are JSON documents. Uses WAL mode and busy_timeout for concurrency.
    """

    def __init__(self, db_path: str, tablename: str, flag: str = "r", autocommit: bool = True):
        """
        Args:
            db_path: Path to SQLite database file
            tablename: Table name to use
            flag: 'r' for read-only, 'c' for read-write (create if needed)
            autocommit: If True, commit after each write operation
        """
        if flag not in ("r", "c"):
            raise ValueError(f"Invalid flag '{flag}': must be 'r' (read-only) or 'c' (read-write/create)")

        if not _VALID_TABLENAME_RE.match(tablename):
            raise ValueError(
                f"Invalid table name '{tablename}': must be alphanumeric with underscores, starting with letter or underscore"
            )

        self.db_path = db_path
        self.tablename = tablename
        self.flag = flag
        self.autocommit = autocommit
        self._conn = None
        self._closed = False

        if flag == "r":
            if not os.path.exists(db_path):
                raise FileNotFoundError(f"Database not found: {db_path}")
            self._conn = sqlite3.connect(
                f"file:{db_path}?mode=ro",
                uri=True,
                timeout=_db_timeout(),
                check_same_thread=False,
            )
        else:
            db_dir = os.path.dirname(db_path)
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)
            self._conn = sqlite3.connect(db_path, timeout=_db_timeout(), check_same_thread=False)

        _init_connection(self._conn, enable_wal=(flag == "c"))

        if flag == "c":
            self._conn.execute(f"CREATE TABLE IF NOT EXISTS {tablename} (key TEXT PRIMARY KEY, value TEXT)")
            if self.autocommit:
                self._conn.commit()
        else:
            cursor = self._conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
                (tablename,),
            )
            if cursor.fetchone() is None:
                self._conn.close()
                self._closed = True
                raise sqlite3.OperationalError(f"no such table: {tablename}")

    @staticmethod
    def _encode(obj) -> str:
        return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))

    @staticmethod
    def _decode(data):
        if data is None:
            return None
        return json.loads(data)

    def _retry(self, fn):
        max_retries = _db_max_retries()
        for attempt in range(max_retries):
            try:
                return fn()
            except sqlite3.OperationalError as exc:
                msg = str(exc).lower()
                if ("locked" in msg or "busy" in msg) and attempt < max_retries - 1:
                    time.sleep(_db_retry_base_sleep() * (2**attempt))
                    continue
                raise

    def _execute_with_retry(self, sql: str, params=()):
        return self._retry(lambda: self._conn.execute(sql, params))

    def _commit_with_retry(self):
        if self._conn:
            self._retry(self._conn.commit)

    def _check_writable(self):
        if self.flag == "r":
            raise RuntimeError("Cannot write to read-only database")

    def __getitem__(self, key: str):
        cursor = self._execute_with_retry(f"SELECT value FROM {self.tablename} WHERE key = ?", (key,))
        row = cursor.fetchone()
        if row is None:
            raise KeyError(key)
        return self._decode(row[0])

    def __setitem__(self, key: str, value):
        self._check_writable()
        self._execute_with_retry(
            f"INSERT OR REPLACE INTO {self.tablename} (key, value) VALUES (?, ?)",
            (key, self._encode(value)),
        )
        if self.autocommit:
            self._commit_with_retry()

    def get(self, key: str, default=None):
        """Get value by key, return default if not found."""
        try:
            return self[key]
        except KeyError:
            return default

    def values(self):
        """Iterate over all values in insertion (rowid) order."""
        cursor = self._execute_with_retry(f"SELECT value FROM {self.tablename} ORDER BY rowid")
        for row in cursor:
            yield self._decode(row[0])

    def set_many(self, mapping: dict):
        """Batch set multiple key-value pairs in a single transaction."""
        self._check_writable()
        if not mapping:
            return
        rows = [(key, self._encode(value)) for key, value in mapping.items()]
        self._retry(
            lambda: self._conn.executemany(
                f"INSERT OR REPLACE INTO {self.tablename} (key, value) VALUES (?, ?)",
                rows,
            )
        )
        if self.autocommit:
            self._commit_with_retry()

    def items_with_prefix(self, prefix: str):
        """Iterate over (key, value) pairs where key starts with the given prefix."""
        cursor = self._execute_with_retry(
            f"SELECT key, value FROM {self.tablename} WHERE substr(key, 1, ?) = ? ORDER BY rowid",
            (len(prefix), prefix),
        )
        for row in cursor:
            yield row[0], self._decode(row[1])

    def close(self):
        """Close the database connection."""
        conn = getattr(self, "_conn", None)
        closed = getattr(self, "_closed", True)
        if conn and not closed:
            try:
                if self.flag == "c" and not self.autocommit:
                    self._commit_with_retry()
                conn.close()
            finally:
                self._closed = True
                self._conn = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def __del__(self):
        self.close()


# -----------------------------------------------------------------------------
# Database file paths


def catalog_db_file() -> str:
    """Path of the catalog database under the configured data directory."""
    return os.path.join(str(config.settings.data_dir), "catalog.db")


# -----------------------------------------------------------------------------
# Database accessor functions


def _safe_open_db(db_path: str, tablename: str, flag: str = "r", autocommit: bool = True):
    """
    Open a database table. With flag='r' a missing database or table is
    created first, so a fresh install reads as an empty catalog.
    """
    try:
        return SqliteKV(db_path, tablename, flag=flag, autocommit=autocommit)
    except (FileNotFoundError, sqlite3.OperationalError):
        if flag != "r":
            raise
        with SqliteKV(db_path, tablename, flag="c", autocommit=True):
            pass
        return SqliteKV(db_path, tablename, flag=flag, autocommit=autocommit)


def get_products_db(flag="r", autocommit=True, db_path: str | None = None):
    """Products table. Key: str(product id). Value: product document."""
    return _safe_open_db(db_path or catalog_db_file(), "products", flag, autocommit)


def get_collections_db(flag="r", autocommit=True, db_path: str | None = None):
    """Collections table. Key: str(collection id). Value: {id, title, description}."""
    return _safe_open_db(db_path or catalog_db_file(), "collections", flag, autocommit)


def get_reviews_db(flag="r", autocommit=True, db_path: str | None = None):
    """
    Reviews table with one entry per review.
    Key format: "product_id::review_id" (e.g., "12::3")
    Value: review document
    """
    return _safe_open_db(db_path or catalog_db_file(), "reviews", flag, autocommit)


def review_key(product_id: int, review_id: int) -> str:
    """Generate a review key from product and review ids."""
    return f"{product_id}::{review_id}"


def review_prefix(product_id: int) -> str:
    """Key prefix shared by all reviews of a product."""
    return f"{product_id}::"
