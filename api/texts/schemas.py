"""
Pydantic schemas for text entry endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class TextCreate(BaseModel):
    text: str = Field(..., min_length=1)


class TextCreated(BaseModel):
    id: int
    message: str


class TextEntry(BaseModel):
    id: int
    text: str
