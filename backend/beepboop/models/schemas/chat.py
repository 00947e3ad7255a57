from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field
from sqlmodel import SQLModel

from .common import Credits


class ChatMessage(BaseModel):
    """Schema for chat messages, both on the wire and as persisted"""
    role: Literal["system", "user", "assistant"]
    content: str


class ChatData(BaseModel):
    """Schema for the JSON document stored in Chat.chat_data"""
    messages: List[ChatMessage] = []


class ChatCreate(SQLModel):
    """Schema for creating a chat"""
    user_id: int
    title: str | None = None
    messages: List[ChatMessage] = []


class ChatUpdate(SQLModel):
    """Schema for updating a chat; messages replace the whole history"""
    title: str | None = None
    messages: List[ChatMessage] | None = None


class ChatPublic(SQLModel):
    """Schema for public chat data"""
    id: int
    user_id: int
    title: str | None
    chat_data: ChatData
    created_at: datetime
    updated_at: datetime


class SendMessageRequest(BaseModel):
    """Schema for sending a user message to a model"""
    user_id: int
    model_name: str = Field(min_length=1)
    message: ChatMessage
    chat_id: Optional[int] = None  # None starts a new chat


class SendMessageResponse(BaseModel):
    """Schema for the outcome of a send"""
    message: ChatMessage  # assistant reply, or the fallback apology
    chat_id: int
    title: str | None = None
    remaining_credits: Credits
    state: str
    is_fallback: bool = False
