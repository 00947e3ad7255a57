from .user import User
from .chat import Chat
from .llm_model import LLMModel
from .bookmark import Bookmark

__all__ = [
    "User",
    "Chat",
    "LLMModel",
    "Bookmark",
]
