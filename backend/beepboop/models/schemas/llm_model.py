from datetime import datetime
from decimal import Decimal
from typing import List

from sqlmodel import Field, SQLModel

from .common import Credits


class LLMModelCreate(SQLModel):
    """Schema for registering a model"""
    name: str = Field(min_length=1, max_length=255)
    model_path: str = Field(min_length=1, max_length=255)
    token_cost: Decimal = Field(ge=0)
    description: str | None = None
    parameters: str | None = None


class LLMModelPublic(SQLModel):
    """Schema for public model data"""
    id: int
    name: str
    description: str | None
    token_cost: Credits
    model_path: str
    parameters: str | None
    added_at: datetime


class LLMModelsPublic(SQLModel):
    data: List[LLMModelPublic]
    count: int
