from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class Bookmark(SQLModel, table=True):
    """Database model for a bookmarked message within a chat"""
    id: Optional[int] = Field(default=None, primary_key=True)
    chat_id: int = Field(index=True, foreign_key="chat.id")
    name: str = Field(max_length=255)
    description: str | None = Field(default=None)
    # {"message_index": int, "context": str}
    position_data: Dict[str, Any] = Field(sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
