from typing import List

from pydantic import BaseModel, Field

from .chat import ChatMessage


class ChatCompletionRequest(BaseModel):
    """Body sent to the OpenAI-compatible chat completions endpoint"""
    model: str
    messages: List[ChatMessage]
    temperature: float = 0.7
    max_tokens: int = -1  # -1 means unbounded
    stream: bool = False


class ChatCompletionChoice(BaseModel):
    message: ChatMessage


class ChatCompletionResponse(BaseModel):
    """Subset of the completion response the protocol relies on"""
    choices: List[ChatCompletionChoice] = Field(min_length=1)
