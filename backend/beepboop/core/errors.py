"""
Domain errors raised by the stores and the message send protocol.
"""
from decimal import Decimal
from typing import Any, Dict, Optional


def format_credits(value: Decimal | int | float) -> str:
    """Render a credit amount without trailing zeros ("5.00" -> "5")."""
    normalized = Decimal(str(value)).normalize()
    return f"{normalized:f}"


class ChatAppError(Exception):
    """Base class for all application errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ModelNotFoundError(ChatAppError):
    def __init__(self, model_name: str):
        super().__init__(
            f"Selected model information not found: {model_name}",
            {"model_name": model_name},
        )
        self.model_name = model_name


class InsufficientCreditsError(ChatAppError):
    def __init__(self, required: Decimal, available: Decimal):
        super().__init__(
            f"Insufficient credits. This model requires {format_credits(required)} "
            f"credits per message. You have {format_credits(available)} credits.",
            {"required": str(required), "available": str(available)},
        )
        self.required = required
        self.available = available


class CompletionServiceError(ChatAppError):
    """Network, non-2xx or malformed-body failure of the completion service"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, {"status_code": status_code} if status_code else None)
        self.status_code = status_code


class PersistenceError(ChatAppError):
    """A store write failed; balance or history may be inconsistent"""

    def __init__(self, message: str, operation: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.operation = operation

    def __str__(self) -> str:
        return f"Persistence Error ({self.operation}): {self.message}"


class UserNotFoundError(ChatAppError):
    def __init__(self, user_id: int):
        super().__init__("User not found", {"user_id": user_id})


class ChatNotFoundError(ChatAppError):
    def __init__(self, chat_id: int):
        super().__init__("Chat not found", {"chat_id": chat_id})


class BookmarkNotFoundError(ChatAppError):
    def __init__(self, bookmark_id: int):
        super().__init__("Bookmark not found", {"bookmark_id": bookmark_id})


class BookmarkLimitExceededError(ChatAppError):
    def __init__(self, chat_id: int, limit: int):
        super().__init__(
            f"Maximum limit of {limit} bookmarks per chat reached",
            {"chat_id": chat_id, "limit": limit},
        )
        self.limit = limit


class DuplicateModelError(ChatAppError):
    def __init__(self, name: str):
        super().__init__("Model with this name already exists", {"name": name})


class DuplicateUserError(ChatAppError):
    def __init__(self, username: str, email: str):
        super().__init__(
            "Username or email already exists", {"username": username, "email": email}
        )
