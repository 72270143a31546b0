"""Request dispatcher for the ``/api/users`` resource.

Every inbound request is matched against :data:`ROUTES` by method and path.
Each route action issues exactly one statement against the storage handle it
is given and maps the outcome to a plain-text or JSON response. Anything that
escapes a route action is converted into a ``500`` by :func:`handle`.
"""
from __future__ import annotations

import logging
import re
from typing import Awaitable, Callable, Pattern, Tuple

import anyio
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from . import users
from .database import Storage
from .models import UserPayload

logger = logging.getLogger("userapi.handler")

RouteAction = Callable[..., Awaitable[Response]]

_COLLECTION_PATH = re.compile(r"/api/users")
_MEMBER_PATH = re.compile(r"/api/users/(?P<user_id>[0-9]+)")


def _text(body: str, status_code: int) -> PlainTextResponse:
    return PlainTextResponse(body, status_code=status_code)


async def _read_payload(request: Request) -> UserPayload:
    data = await request.json()
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return UserPayload.model_validate(data)


async def list_users(request: Request, database: Storage) -> Response:
    records = await anyio.to_thread.run_sync(users.list_users, database)
    return JSONResponse([record.to_dict() for record in records])


async def get_user(request: Request, database: Storage, user_id: str) -> Response:
    record = await anyio.to_thread.run_sync(users.get_user, database, user_id)
    if record is None:
        return _text("User not found", status.HTTP_404_NOT_FOUND)
    return JSONResponse(record.to_dict())


async def create_user(request: Request, database: Storage) -> Response:
    payload = await _read_payload(request)
    if not payload.name or not payload.email or not payload.password:
        return _text("Name, email and password are required", status.HTTP_400_BAD_REQUEST)

    result = await anyio.to_thread.run_sync(
        users.insert_user, database, payload.name, payload.email, payload.password
    )
    if not result.success:
        return _text("Failed to create user", status.HTTP_500_INTERNAL_SERVER_ERROR)
    logger.info("Created user %s", result.last_row_id)
    return _text("User created successfully", status.HTTP_201_CREATED)


async def update_user(request: Request, database: Storage, user_id: str) -> Response:
    payload = await _read_payload(request)
    result = await anyio.to_thread.run_sync(users.update_user, database, user_id, payload)
    if not result.success:
        return _text("Failed to update user", status.HTTP_500_INTERNAL_SERVER_ERROR)
    logger.info("Updated user %s (%d row(s) affected)", user_id, result.changes)
    return _text("User updated successfully", status.HTTP_200_OK)


async def delete_user(request: Request, database: Storage, user_id: str) -> Response:
    result = await anyio.to_thread.run_sync(users.delete_user, database, user_id)
    if not result.success:
        return _text("Failed to delete user", status.HTTP_500_INTERNAL_SERVER_ERROR)
    logger.info("Deleted user %s (%d row(s) affected)", user_id, result.changes)
    return _text("User deleted successfully", status.HTTP_200_OK)


ROUTES: Tuple[Tuple[str, Pattern[str], RouteAction], ...] = (
    ("GET", _COLLECTION_PATH, list_users),
    ("GET", _MEMBER_PATH, get_user),
    ("POST", _COLLECTION_PATH, create_user),
    ("PUT", _MEMBER_PATH, update_user),
    ("DELETE", _MEMBER_PATH, delete_user),
)


async def _dispatch(request: Request, database: Storage) -> Response:
    path = request.url.path
    for method, pattern, action in ROUTES:
        if request.method != method:
            continue
        match = pattern.fullmatch(path)
        if match is None:
            continue
        return await action(request, database, **match.groupdict())
    return _text("Not found", status.HTTP_404_NOT_FOUND)


async def handle(request: Request, database: Storage) -> Response:
    """Route ``request`` and execute it against ``database``."""

    try:
        return await _dispatch(request, database)
    except Exception as exc:
        logger.exception("Unhandled error processing %s %s", request.method, request.url.path)
        message = str(exc)
        if message:
            return _text(f"Error: {message}", status.HTTP_500_INTERNAL_SERVER_ERROR)
        return _text("Unknown error", status.HTTP_500_INTERNAL_SERVER_ERROR)


__all__ = ["ROUTES", "handle"]
