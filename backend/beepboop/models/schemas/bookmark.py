from datetime import datetime
from typing import List

from pydantic import BaseModel
from sqlmodel import Field, SQLModel


class PositionData(BaseModel):
    """Where a bookmark points inside its chat"""
    message_index: int = Field(ge=0)
    context: str = ""


class BookmarkCreate(SQLModel):
    """Schema for creating a bookmark"""
    chat_id: int
    name: str = Field(min_length=1, max_length=255)
    message_index: int = Field(ge=0)
    description: str | None = None
    context: str | None = None


class BookmarkUpdate(SQLModel):
    """Schema for updating a bookmark"""
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    message_index: int | None = Field(default=None, ge=0)
    context: str | None = None


class BookmarkPublic(SQLModel):
    """Schema for public bookmark data"""
    id: int
    chat_id: int
    name: str
    description: str | None
    position_data: PositionData
    created_at: datetime


class BookmarksPublic(SQLModel):
    data: List[BookmarkPublic]
    count: int
