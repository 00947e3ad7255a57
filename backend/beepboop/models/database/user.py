from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """Database model for user table"""
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=255)
    name: str | None = Field(default=None, max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    credits: Decimal = Field(default=Decimal("10"), ge=0, max_digits=12, decimal_places=2)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
