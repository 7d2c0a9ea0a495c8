"""
Text entry persistence (raw SQL).

The table stores the entry body in `content`; callers see it as `text`.
"""

from __future__ import annotations

import logging

from core.db import DB_ERRORS, Database, DatabaseStartupError

logger = logging.getLogger(__name__)


async def ensure_table(db: Database) -> None:
    """
    Create the `texts` table if it does not exist yet.
    """
    try:
        await db.execute(
            """
            CREATE TABLE IF NOT EXISTS texts (
                id SERIAL PRIMARY KEY,
                content TEXT NOT NULL
            )
            """
        )
    except DB_ERRORS as exc:
        raise DatabaseStartupError(f"error creating table: {exc}") from exc
    logger.info("table_ensured table=texts")


async def insert_text(db: Database, text: str) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO texts (content)
        VALUES ($1)
        RETURNING id
        """,
        text,
    )
    if row is None or "id" not in row:
        raise RuntimeError("Failed to insert text.")
    return int(row["id"])


async def get_text_by_id(db: Database, text_id: int) -> dict | None:
    row = await db.fetch_one(
        """
        SELECT id, content
        FROM texts
        WHERE id = $1
        """,
        text_id,
    )
    if row is None:
        return None
    return {"id": int(row["id"]), "text": str(row["content"])}
