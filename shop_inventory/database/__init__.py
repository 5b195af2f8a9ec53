# shop_inventory/database/__init__.py
from __future__ import annotations

import logging
from pathlib import Path
import sqlite3

from ..config import DB_PATH
from ..constants import SCHEMA_VERSION
from . import schema as schema_module
from .versioning import get_current_version, set_current_version

_log = logging.getLogger(__name__)


def get_connection(db_path: Path | str | None = None) -> sqlite3.Connection:
    """
    Returns a sqlite3.Connection with:
      - WAL mode (file databases)
      - foreign_keys ON
      - row_factory = sqlite3.Row (so rows behave like dicts and tuples)
    Ensures schema and column migrations are applied idempotently.
    Pass ":memory:" for a throwaway database.
    """
    target = DB_PATH if db_path is None else db_path
    in_memory = str(target) == ":memory:"
    if not in_memory:
        Path(target).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(target))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    if not in_memory:
        conn.execute("PRAGMA journal_mode = WAL;")

    schema_module.apply_schema(conn)

    current = get_current_version(conn)
    if current != SCHEMA_VERSION:
        _log.info("Schema version %s -> %s", current, SCHEMA_VERSION)
        set_current_version(conn, SCHEMA_VERSION)

    conn.commit()
    return conn


__all__ = [
    "get_connection",
]
