from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


def empty_chat_data() -> Dict[str, Any]:
    return {"messages": []}


class Chat(SQLModel, table=True):
    """Database model for a chat session; messages live in chat_data["messages"]"""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, foreign_key="user.id")
    title: str | None = Field(default=None, max_length=255)
    chat_data: Dict[str, Any] = Field(default_factory=empty_chat_data, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
