"""Domain models for the user API."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel


@dataclass(frozen=True)
class User:
    """Represents a user row as exposed to API clients.

    The stored password hash is deliberately not part of this record.
    """

    id: int
    name: str
    email: str
    created_at: Optional[str]
    updated_at: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class UserPayload(BaseModel):
    """JSON body accepted by the create and update routes."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


__all__ = ["User", "UserPayload"]
