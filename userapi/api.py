"""FastAPI application exposing the user CRUD endpoints."""
from __future__ import annotations

from fastapi import FastAPI, Request, Response

from .config import load_settings
from .database import Database, Storage
from .handler import handle

HTTP_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(
    *,
    database: Storage | None = None,
    initialize_database: bool = False,
) -> FastAPI:
    if database is None:
        settings = load_settings()
        database = Database(settings.database_path)
        database.initialize()
    elif initialize_database and isinstance(database, Database):
        database.initialize()

    app = FastAPI(
        title="User API",
        description="Create, read, update and delete user records",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.database = database

    @app.api_route("/{path:path}", methods=HTTP_METHODS, include_in_schema=False)
    async def dispatch(request: Request) -> Response:
        return await handle(request, database)

    return app


__all__ = ["create_app"]
