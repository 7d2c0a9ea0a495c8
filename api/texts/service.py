"""
Text entry request handling.

Maps request input and storage outcomes onto HTTP results:
- invalid body or id -> 400, storage is never touched
- unknown id -> 404
- any storage failure -> logged here, 500 with a generic message
"""

from __future__ import annotations

import logging
import re

from fastapi import HTTPException, status
from pydantic import ValidationError

from core.db import DB_ERRORS, Database

from . import repository, schemas

INVALID_BODY_MESSAGE = "Invalid request body or missing 'text' field"
INVALID_ID_MESSAGE = "Invalid ID format"
STORE_FAILED_MESSAGE = "Could not store text"
RETRIEVE_FAILED_MESSAGE = "Could not retrieve text"
CREATED_MESSAGE = "Text stored successfully"

# Range of the Postgres `integer` type backing `texts.id`.
MIN_TEXT_ID = -(2**31)
MAX_TEXT_ID = 2**31 - 1

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

# An uninitialized pool or an INSERT without a returned id also count as storage failures.
_STORAGE_ERRORS = (*DB_ERRORS, RuntimeError)

logger = logging.getLogger(__name__)


def parse_create_body(body: bytes) -> schemas.TextCreate:
    try:
        return schemas.TextCreate.model_validate_json(body or b"")
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_BODY_MESSAGE) from exc


def parse_text_id(raw: str) -> int:
    if not _ID_PATTERN.fullmatch(raw or ""):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_ID_MESSAGE)
    text_id = int(raw)
    if not MIN_TEXT_ID <= text_id <= MAX_TEXT_ID:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_ID_MESSAGE)
    return text_id


async def create_text(db: Database, payload: schemas.TextCreate) -> schemas.TextCreated:
    try:
        text_id = await repository.insert_text(db, payload.text)
    except _STORAGE_ERRORS as exc:
        logger.exception("db_insert_failed error=%s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=STORE_FAILED_MESSAGE,
        ) from exc
    return schemas.TextCreated(id=text_id, message=CREATED_MESSAGE)


async def get_text(db: Database, text_id: int) -> schemas.TextEntry:
    try:
        row = await repository.get_text_by_id(db, text_id)
    except _STORAGE_ERRORS as exc:
        logger.exception("db_select_failed text_id=%s error=%s", text_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=RETRIEVE_FAILED_MESSAGE,
        ) from exc

    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Text with id {text_id} not found",
        )
    return schemas.TextEntry(id=row["id"], text=row["text"])
