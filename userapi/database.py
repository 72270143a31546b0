"""SQLite-backed storage for user records."""
from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

logger = logging.getLogger("userapi.database")

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT NOT NULL,
    password TEXT NOT NULL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
"""


def _ensure_directory(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_database_path(env_value: Optional[str]) -> Path:
    """Resolve the on-disk path for the application database."""

    if env_value:
        return Path(env_value).expanduser().resolve(strict=False)
    base_dir = Path(__file__).resolve().parent.parent / "data"
    return (base_dir / "users.sqlite3").resolve(strict=False)


@dataclass(frozen=True)
class StatementResult:
    """Outcome of a write statement.

    ``success`` is ``False`` only when the database rejected the statement;
    a statement that matched no rows still succeeds with ``changes == 0``.
    """

    success: bool
    changes: int = 0
    last_row_id: Optional[int] = None
    error: Optional[str] = None


class Storage(Protocol):
    def all(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        ...

    def run(self, sql: str, params: Sequence[Any] = ()) -> StatementResult:
        ...


class Database:
    """Simple wrapper around SQLite executing one parameterized statement per call."""

    def __init__(self, path: Path) -> None:
        _ensure_directory(path)
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def initialize(self) -> None:
        """Create the ``users`` table if it does not already exist."""

        with self._connect() as conn:
            conn.executescript(SCHEMA)

    def all(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Execute a read statement and return every row as a dictionary."""

        with self._connect() as conn:
            rows = conn.execute(sql, tuple(params)).fetchall()
        return [dict(row) for row in rows]

    def run(self, sql: str, params: Sequence[Any] = ()) -> StatementResult:
        """Execute a write statement, reporting database errors in the result."""

        try:
            with self._connect() as conn:
                cursor = conn.execute(sql, tuple(params))
        except sqlite3.DatabaseError as exc:
            logger.warning("Statement failed: %s", exc)
            return StatementResult(success=False, error=str(exc))
        return StatementResult(success=True, changes=cursor.rowcount, last_row_id=cursor.lastrowid)


__all__ = ["Database", "StatementResult", "Storage", "resolve_database_path"]
