from datetime import datetime
from typing import List

from pydantic import EmailStr
from sqlmodel import Field, SQLModel

from .common import Credits


class UserBase(SQLModel):
    """Base schema for user data"""
    username: str = Field(min_length=1, max_length=255)
    name: str | None = Field(default=None, max_length=255)
    email: EmailStr = Field(max_length=255)


class UserCreate(UserBase):
    """Schema for creating a user; credits start at the configured default"""
    pass


class UserPublic(UserBase):
    """Schema for public user data"""
    id: int
    credits: Credits
    created_at: datetime


class UsersPublic(SQLModel):
    """Schema for list of public user data"""
    data: List[UserPublic]
    count: int
