from .user import UserBase, UserCreate, UserPublic, UsersPublic
from .credit import UpdateCredit, CreditAdd, CreditAddResponse
from .message import Message, SuccessResponse
from .completion import ChatCompletionRequest, ChatCompletionChoice, ChatCompletionResponse
from .chat import (
    ChatMessage, ChatData, ChatCreate, ChatUpdate, ChatPublic,
    SendMessageRequest, SendMessageResponse,
)
from .llm_model import LLMModelCreate, LLMModelPublic, LLMModelsPublic
from .bookmark import PositionData, BookmarkCreate, BookmarkUpdate, BookmarkPublic, BookmarksPublic

__all__ = [
    # User schemas
    "UserBase", "UserCreate", "UserPublic", "UsersPublic",
    # Credit schemas
    "UpdateCredit", "CreditAdd", "CreditAddResponse",
    # Generic responses
    "Message", "SuccessResponse",
    # Chat schemas
    "ChatMessage", "ChatData", "ChatCreate", "ChatUpdate", "ChatPublic",
    "SendMessageRequest", "SendMessageResponse",
    # Completion service wire schemas
    "ChatCompletionRequest", "ChatCompletionChoice", "ChatCompletionResponse",
    # Model schemas
    "LLMModelCreate", "LLMModelPublic", "LLMModelsPublic",
    # Bookmark schemas
    "PositionData", "BookmarkCreate", "BookmarkUpdate", "BookmarkPublic", "BookmarksPublic",
]
