"""SQL statements for the ``users`` table."""
from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from .database import StatementResult, Storage
from .models import User, UserPayload
from .security import hash_password

LIST_USERS_SQL = "SELECT id, name, email, created_at, updated_at FROM users"
GET_USER_SQL = "SELECT id, name, email, created_at, updated_at FROM users WHERE id = ?"
INSERT_USER_SQL = "INSERT INTO users (name, email, password) VALUES (?, ?, ?)"
DELETE_USER_SQL = "DELETE FROM users WHERE id = ?"

UPDATABLE_COLUMNS = ("name", "email", "password")


def _supplied(value: Optional[str]) -> Optional[str]:
    # Empty strings are treated the same as an absent key.
    if value is None or value == "":
        return None
    return value


def update_changes(payload: UserPayload) -> List[Tuple[str, Optional[str]]]:
    """Return ``(column, value)`` pairs for every updatable column.

    ``value`` is ``None`` when the column was not supplied and must be left
    untouched. Passwords are hashed here so the plaintext never reaches the
    statement bindings.
    """

    changes: List[Tuple[str, Optional[str]]] = []
    for column in UPDATABLE_COLUMNS:
        value = _supplied(getattr(payload, column))
        if column == "password" and value is not None:
            value = hash_password(value)
        changes.append((column, value))
    return changes


def build_update_statement(
    user_id: str, changes: Sequence[Tuple[str, Optional[str]]]
) -> Tuple[str, List[Any]]:
    updates: List[str] = []
    values: List[Any] = []
    for column, value in changes:
        if value is None:
            continue
        updates.append(f"{column} = ?")
        values.append(value)

    updates.append("updated_at = CURRENT_TIMESTAMP")
    values.append(user_id)
    return f"UPDATE users SET {', '.join(updates)} WHERE id = ?", values


def _row_to_user(row: dict) -> User:
    return User(
        id=int(row["id"]),
        name=str(row["name"]),
        email=str(row["email"]),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def list_users(storage: Storage) -> List[User]:
    return [_row_to_user(row) for row in storage.all(LIST_USERS_SQL)]


def get_user(storage: Storage, user_id: str) -> Optional[User]:
    rows = storage.all(GET_USER_SQL, (user_id,))
    if not rows:
        return None
    return _row_to_user(rows[0])


def insert_user(storage: Storage, name: str, email: str, password: str) -> StatementResult:
    """Hash ``password`` and insert a new user row."""

    return storage.run(INSERT_USER_SQL, (name, email, hash_password(password)))


def update_user(storage: Storage, user_id: str, payload: UserPayload) -> StatementResult:
    sql, values = build_update_statement(user_id, update_changes(payload))
    return storage.run(sql, values)


def delete_user(storage: Storage, user_id: str) -> StatementResult:
    return storage.run(DELETE_USER_SQL, (user_id,))


__all__ = [
    "DELETE_USER_SQL",
    "GET_USER_SQL",
    "INSERT_USER_SQL",
    "LIST_USERS_SQL",
    "build_update_statement",
    "delete_user",
    "get_user",
    "insert_user",
    "list_users",
    "update_changes",
    "update_user",
]
