"""
Text entry API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from core.db import Database

from . import schemas, service
from .dependencies import get_db

router = APIRouter()

_CREATE_BODY_SCHEMA = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": schemas.TextCreate.model_json_schema()}},
    }
}


@router.post(
    "/text",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.TextCreated,
    openapi_extra=_CREATE_BODY_SCHEMA,
)
async def create_text(
    request: Request,
    db: Database = Depends(get_db),
) -> schemas.TextCreated:
    """
    Store one text entry and return its new id.

    The body is parsed here rather than bound by FastAPI so that every bad
    body (malformed JSON included) yields the same 400 message.
    """
    payload = service.parse_create_body(await request.body())
    return await service.create_text(db, payload)


@router.get("/text/{text_id}", response_model=schemas.TextEntry)
async def get_text(
    text_id: str,
    db: Database = Depends(get_db),
) -> schemas.TextEntry:
    return await service.get_text(db, service.parse_text_id(text_id))
