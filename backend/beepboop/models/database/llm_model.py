from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlmodel import Field, SQLModel


class LLMModel(SQLModel, table=True):
    """Database model for a model that can be invoked through the completion service"""
    __tablename__ = "llm_model"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=255)
    description: str | None = Field(default=None)
    token_cost: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    model_path: str = Field(max_length=255)
    parameters: str | None = Field(default=None)
    added_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
