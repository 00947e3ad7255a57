from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from sqlalchemy import Numeric, delete, or_, update
from sqlmodel import Session, col, func, select

from beepboop.core.config import settings
from beepboop.core.errors import (
    BookmarkLimitExceededError,
    ChatNotFoundError,
    DuplicateModelError,
    DuplicateUserError,
    InsufficientCreditsError,
    UserNotFoundError,
)
from beepboop.models.database import Bookmark, Chat, LLMModel, User
from beepboop.models.schemas.bookmark import BookmarkCreate, BookmarkUpdate
from beepboop.models.schemas.chat import ChatMessage
from beepboop.models.schemas.llm_model import LLMModelCreate
from beepboop.models.schemas.user import UserCreate

DEFAULT_CHAT_TITLE = "New Chat"

# SQLite stores Numeric as REAL; balance arithmetic is rounded back to cents in SQL
CREDITS_TYPE = Numeric(12, 2)

MessagesIn = Sequence[Union[ChatMessage, Dict[str, Any]]]


def _round_credits(expression):
    return func.round(expression, 2, type_=CREDITS_TYPE)


def _dump_messages(messages: MessagesIn) -> List[Dict[str, Any]]:
    return [
        m.model_dump() if isinstance(m, ChatMessage) else ChatMessage.model_validate(m).model_dump()
        for m in messages
    ]


# User-related CRUD operations

def get_user(session: Session, user_id: int) -> Optional[User]:
    return session.get(User, user_id)


def get_users(session: Session, skip: int = 0, limit: int = 100) -> Tuple[List[User], int]:
    count = session.exec(select(func.count()).select_from(User)).one()
    users = session.exec(select(User).order_by(User.id).offset(skip).limit(limit)).all()
    return list(users), count


def create_user(*, session: Session, user_create: UserCreate) -> User:
    existing = session.exec(
        select(User).where(or_(User.username == user_create.username, User.email == user_create.email))
    ).first()
    if existing:
        raise DuplicateUserError(user_create.username, user_create.email)

    user = User(
        username=user_create.username,
        name=user_create.name,
        email=user_create.email,
        credits=settings.DEFAULT_USER_CREDITS,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def set_user_credits(*, session: Session, user: User, credits: Decimal) -> User:
    """Absolute set of a user's balance; the caller computes any delta."""
    user.credits = credits
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def add_user_credits(*, session: Session, user_id: int, amount: Decimal) -> Tuple[Decimal, User]:
    """
    Top up a user's balance.

    Returns:
        Tuple of (previous_credits, updated user)
    """
    user = session.get(User, user_id)
    if not user:
        raise UserNotFoundError(user_id)
    previous = user.credits

    session.exec(
        update(User)
        .where(col(User.id) == user_id)
        .values(credits=_round_credits(User.credits + amount))
        .execution_options(synchronize_session=False)
    )
    session.commit()
    session.refresh(user)
    return previous, user


def debit_user_credits(*, session: Session, user_id: int, amount: Decimal) -> Decimal:
    """
    Atomically debit a user's balance, only if it covers the amount.

    Runs a single conditional UPDATE so two concurrent sends for the same
    user cannot both pass the balance check.

    Returns:
        The balance after the debit

    Raises:
        UserNotFoundError: If the user does not exist
        InsufficientCreditsError: If the balance is lower than the amount
    """
    result = session.exec(
        update(User)
        .where(col(User.id) == user_id, _round_credits(col(User.credits)) >= amount)
        .values(credits=_round_credits(User.credits - amount))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        session.rollback()
        user = session.get(User, user_id)
        if not user:
            raise UserNotFoundError(user_id)
        raise InsufficientCreditsError(required=amount, available=user.credits)
    session.commit()

    user = session.get(User, user_id)
    session.refresh(user)
    return user.credits


def refund_user_credits(*, session: Session, user_id: int, amount: Decimal) -> Decimal:
    """
    Give back a previously debited amount.

    The refund is an increment rather than an absolute set so that a top-up
    landing between debit and refund is not lost.

    Returns:
        The balance after the refund
    """
    result = session.exec(
        update(User)
        .where(col(User.id) == user_id)
        .values(credits=_round_credits(User.credits + amount))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        session.rollback()
        raise UserNotFoundError(user_id)
    session.commit()

    user = session.get(User, user_id)
    session.refresh(user)
    return user.credits


# Model-related CRUD operations

def get_models(session: Session, name: Optional[str] = None) -> List[LLMModel]:
    statement = select(LLMModel)
    if name:
        statement = statement.where(LLMModel.name == name)
    return list(session.exec(statement.order_by(LLMModel.id)).all())


def get_model_by_name(session: Session, name: str) -> Optional[LLMModel]:
    return session.exec(select(LLMModel).where(LLMModel.name == name)).first()


def create_model(*, session: Session, model_create: LLMModelCreate) -> LLMModel:
    if get_model_by_name(session, model_create.name):
        raise DuplicateModelError(model_create.name)

    model = LLMModel.model_validate(model_create)
    session.add(model)
    session.commit()
    session.refresh(model)
    return model


# Chat-related CRUD operations

def get_chat(session: Session, chat_id: int) -> Optional[Chat]:
    return session.get(Chat, chat_id)


def get_user_chats(session: Session, user_id: int) -> List[Chat]:
    statement = (
        select(Chat)
        .where(Chat.user_id == user_id)
        .order_by(col(Chat.updated_at).desc(), col(Chat.id).desc())
    )
    return list(session.exec(statement).all())


def get_chat_messages(session: Session, chat_id: int) -> List[ChatMessage]:
    """Read the full, ordered message history of a chat from the store."""
    chat = session.get(Chat, chat_id)
    if not chat:
        raise ChatNotFoundError(chat_id)
    session.refresh(chat)
    return [ChatMessage.model_validate(m) for m in chat.chat_data.get("messages", [])]


def create_chat(
    *,
    session: Session,
    user_id: int,
    title: Optional[str] = None,
    messages: Optional[MessagesIn] = None,
) -> Chat:
    if not session.get(User, user_id):
        raise UserNotFoundError(user_id)

    chat = Chat(
        user_id=user_id,
        title=title or DEFAULT_CHAT_TITLE,
        chat_data={"messages": _dump_messages(messages or [])},
    )
    session.add(chat)
    session.commit()
    session.refresh(chat)
    return chat


def replace_chat_messages(*, session: Session, chat_id: int, messages: MessagesIn) -> Chat:
    """
    Full-history write: replace the whole message array and bump updated_at.

    Writing the same array twice leaves the same stored state.
    """
    chat = session.get(Chat, chat_id)
    if not chat:
        raise ChatNotFoundError(chat_id)
    return update_chat(session=session, chat=chat, messages=messages)


def update_chat(
    *,
    session: Session,
    chat: Chat,
    title: Optional[str] = None,
    messages: Optional[MessagesIn] = None,
) -> Chat:
    if title is not None:
        chat.title = title
    if messages is not None:
        # Assign a new dict so the JSON column is flagged dirty
        chat.chat_data = {"messages": _dump_messages(messages)}
    chat.updated_at = datetime.now(timezone.utc)

    session.add(chat)
    session.commit()
    session.refresh(chat)
    return chat


def delete_chat(*, session: Session, chat: Chat) -> None:
    session.exec(delete(Bookmark).where(col(Bookmark.chat_id) == chat.id))
    session.delete(chat)
    session.commit()


# Bookmark-related CRUD operations

def get_chat_bookmarks(session: Session, chat_id: int) -> List[Bookmark]:
    statement = (
        select(Bookmark)
        .where(Bookmark.chat_id == chat_id)
        .order_by(col(Bookmark.created_at).desc(), col(Bookmark.id).desc())
    )
    return list(session.exec(statement).all())


def count_chat_bookmarks(session: Session, chat_id: int) -> int:
    return session.exec(
        select(func.count()).select_from(Bookmark).where(Bookmark.chat_id == chat_id)
    ).one()


def create_bookmark(*, session: Session, bookmark_create: BookmarkCreate) -> Bookmark:
    if not session.get(Chat, bookmark_create.chat_id):
        raise ChatNotFoundError(bookmark_create.chat_id)

    limit = settings.MAX_BOOKMARKS_PER_CHAT
    if count_chat_bookmarks(session, bookmark_create.chat_id) >= limit:
        raise BookmarkLimitExceededError(bookmark_create.chat_id, limit)

    bookmark = Bookmark(
        chat_id=bookmark_create.chat_id,
        name=bookmark_create.name,
        description=bookmark_create.description,
        position_data={
            "message_index": bookmark_create.message_index,
            "context": bookmark_create.context or "",
        },
    )
    session.add(bookmark)
    session.commit()
    session.refresh(bookmark)
    return bookmark


def update_bookmark(*, session: Session, bookmark: Bookmark, bookmark_in: BookmarkUpdate) -> Bookmark:
    update_data = bookmark_in.model_dump(exclude_unset=True)

    if "name" in update_data:
        bookmark.name = update_data["name"]
    if "description" in update_data:
        bookmark.description = update_data["description"]
    if "message_index" in update_data or "context" in update_data:
        position = dict(bookmark.position_data)
        if update_data.get("message_index") is not None:
            position["message_index"] = update_data["message_index"]
        if "context" in update_data:
            position["context"] = update_data["context"] or ""
        bookmark.position_data = position

    session.add(bookmark)
    session.commit()
    session.refresh(bookmark)
    return bookmark


def delete_bookmark(*, session: Session, bookmark: Bookmark) -> None:
    session.delete(bookmark)
    session.commit()
