"""
Storage client injection for text routes.
"""

from __future__ import annotations

from fastapi import Request

from core.db import Database


def get_db(request: Request) -> Database:
    """
    Return the app-owned storage client opened by the lifespan hook.
    """
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database is not configured on this app.")
    return db
