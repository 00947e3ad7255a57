# Re-export database models
from beepboop.models.database import (
    User,
    Chat,
    LLMModel,
    Bookmark,
)

# Re-export schema models
from beepboop.models.schemas import (
    # User schemas
    UserBase, UserCreate, UserPublic, UsersPublic,
    # Credit schemas
    UpdateCredit, CreditAdd, CreditAddResponse,
    # Generic responses
    Message, SuccessResponse,
    # Chat schemas
    ChatMessage, ChatData, ChatCreate, ChatUpdate, ChatPublic,
    SendMessageRequest, SendMessageResponse,
    # Model schemas
    LLMModelCreate, LLMModelPublic, LLMModelsPublic,
    # Bookmark schemas
    PositionData, BookmarkCreate, BookmarkUpdate, BookmarkPublic, BookmarksPublic,
)

__all__ = [
    # Database models
    "User",
    "Chat",
    "LLMModel",
    "Bookmark",

    # Schema models - User related
    "UserBase", "UserCreate", "UserPublic", "UsersPublic",

    # Schema models - Credit related
    "UpdateCredit", "CreditAdd", "CreditAddResponse",

    # Schema models - Generic
    "Message", "SuccessResponse",

    # Schema models - Chat related
    "ChatMessage", "ChatData", "ChatCreate", "ChatUpdate", "ChatPublic",
    "SendMessageRequest", "SendMessageResponse",

    # Schema models - LLM model related
    "LLMModelCreate", "LLMModelPublic", "LLMModelsPublic",

    # Schema models - Bookmark related
    "PositionData", "BookmarkCreate", "BookmarkUpdate", "BookmarkPublic", "BookmarksPublic",
]
