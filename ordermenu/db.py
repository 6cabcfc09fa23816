"""The SQLite database under data/data.db and its tables."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

_log = logging.getLogger(__name__)

_TABLES = {
    "users": """
        CREATE TABLE "users" (
            "id" TEXT NOT NULL PRIMARY KEY,
            "username" TEXT NOT NULL UNIQUE,
            "password" TEXT NOT NULL
        )""",
    "category": """
        CREATE TABLE "category" (
            "id" TEXT NOT NULL PRIMARY KEY,
            "index" INTEGER NOT NULL,
            "name" TEXT NOT NULL UNIQUE
        )""",
    "dish": """
        CREATE TABLE "dish" (
            "id" TEXT NOT NULL PRIMARY KEY,
            "index" INTEGER NOT NULL,
            "name" TEXT NOT NULL UNIQUE,
            "price" REAL NOT NULL,
            "picture" TEXT NOT NULL,
            "status" TEXT NOT NULL,
            "created_at" TEXT NOT NULL
        )""",
    "category_dish_map": """
        CREATE TABLE "category_dish_map" (
            "category_id" TEXT NOT NULL,
            "dish_id" TEXT NOT NULL,
            PRIMARY KEY ("category_id", "dish_id"),
            FOREIGN KEY ("category_id") REFERENCES "category" ("id"),
            FOREIGN KEY ("dish_id") REFERENCES "dish" ("id")
        )""",
}

_db: sqlite3.Connection | None = None


def check_db_file(path: str | Path, current_dir: str | Path) -> bool:
    """Return True if the database file exists; otherwise create an empty one and return False."""
    path = Path(path)
    if path.exists():
        _log.info("database exists")
        return True
    _log.info("database missing, creating it")
    (Path(current_dir) / "data").mkdir(parents=True, exist_ok=True)
    path.touch()
    return False


def create_all_tables(conn: sqlite3.Connection) -> None:
    """Create every table; fails if any of them already exists."""
    for name, ddl in _TABLES.items():
        try:
            conn.execute(ddl)
        except sqlite3.Error as exc:
            _log.error("create data table error: %s", exc)
            raise
        _log.info("Created %s table.", name)
    conn.commit()


def init_db(base_dir: str | Path | None = None) -> sqlite3.Connection:
    """Open base_dir/data/data.db, creating it and its tables if needed."""
    global _db
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    db_path = base / "data" / "data.db"
    existed = check_db_file(db_path, base)
    conn = sqlite3.connect(db_path, check_same_thread=False, isolation_level=None)
    conn.execute("PRAGMA foreign_keys = ON")
    if not existed:
        create_all_tables(conn)
    if _db is not None:
        _db.close()
    _db = conn
    return conn


def get_db() -> sqlite3.Connection:
    """Return the connection opened by init_db."""
    if _db is None:
        raise RuntimeError("database connection is not initialised")
    return _db