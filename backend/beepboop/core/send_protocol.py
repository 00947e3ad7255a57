"""
Credit-metered message sending.

One send goes through
Idle -> CostChecked -> Debited -> UserMessagePersisted -> AwaitingCompletion
and ends in Completed or RefundedAndFallback. The cost is debited before the
completion call; a failed call is refunded and answered with a fixed
apology message instead of an error.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Callable, List, Optional, TypeVar

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from beepboop import crud
from beepboop.core.config import settings
from beepboop.core.errors import (
    ChatNotFoundError,
    CompletionServiceError,
    InsufficientCreditsError,
    ModelNotFoundError,
    PersistenceError,
    UserNotFoundError,
)
from beepboop.core.llm import CompletionClient
from beepboop.models.schemas.chat import ChatMessage

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Sorry, there was an error processing your message. Please try again."
TITLE_TRUNCATION_MARKER = "..."

T = TypeVar("T")


class SendState(str, Enum):
    IDLE = "idle"
    COST_CHECKED = "cost_checked"
    DEBITED = "debited"
    USER_MESSAGE_PERSISTED = "user_message_persisted"
    AWAITING_COMPLETION = "awaiting_completion"
    COMPLETED = "completed"
    REFUNDED_AND_FALLBACK = "refunded_and_fallback"


@dataclass
class SendContext:
    """Per-send state, passed explicitly instead of living in UI globals"""
    user_id: int
    model_name: str
    chat_id: Optional[int] = None
    history: List[ChatMessage] = field(default_factory=list)
    state: SendState = SendState.IDLE
    is_generating: bool = False
    cost: Optional[Decimal] = None
    balance: Optional[Decimal] = None
    title: Optional[str] = None
    tail_task: Optional["asyncio.Task[SendResult]"] = None


@dataclass
class SendResult:
    """Outcome of a send that got past the pre-flight checks"""
    message: ChatMessage
    chat_id: int
    title: Optional[str]
    remaining_credits: Decimal
    state: SendState
    is_fallback: bool = False


def derive_chat_title(content: str, max_length: int = settings.CHAT_TITLE_MAX_LENGTH) -> str:
    """Title for a new chat: the first max_length characters of the first message."""
    if len(content) > max_length:
        return content[:max_length] + TITLE_TRUNCATION_MARKER
    return content


class MessageSendProtocol:
    """Coordinates credits, chat history and the completion service for one send"""

    def __init__(self, completion_client: CompletionClient):
        self.completion_client = completion_client

    def _persist(self, session: Session, operation: str, write: Callable[[], T]) -> T:
        """
        Run a store write, turning database failures into PersistenceError

        Args:
            session: Database session
            operation: Name of the write, used in logs and the error
            write: Zero-argument callable performing the write

        Returns:
            Whatever the write returns

        Raises:
            PersistenceError: If the write raised a SQLAlchemy error
        """
        try:
            return write()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Store write '{operation}' failed: {str(e)}")
            raise PersistenceError(str(e), operation) from e

    def check_cost(self, session: Session, context: SendContext) -> Decimal:
        """
        Resolve the model cost and make sure the user can pay for it

        Raises:
            ModelNotFoundError: If no model has the requested name
            UserNotFoundError: If the user does not exist
            InsufficientCreditsError: If the balance is lower than the cost
        """
        model = crud.get_model_by_name(session, context.model_name)
        if not model:
            raise ModelNotFoundError(context.model_name)

        user = crud.get_user(session, context.user_id)
        if not user:
            raise UserNotFoundError(context.user_id)
        # The balance may have been changed by another session since it was loaded
        session.refresh(user)

        cost = model.token_cost
        # Equal balance is allowed; the balance may reach exactly zero
        if user.credits < cost:
            raise InsufficientCreditsError(required=cost, available=user.credits)

        context.cost = cost
        context.balance = user.credits
        context.state = SendState.COST_CHECKED
        return cost

    async def send_message(
        self,
        session: Session,
        context: SendContext,
        user_message: ChatMessage,
    ) -> SendResult:
        """
        Send a user message and return the assistant reply

        Pre-flight failures raise before anything is written. Once the
        credits are debited, completion failures never raise: the debit is
        refunded and the fallback apology is returned (and stored) instead.

        Args:
            session: Database session
            context: Send context; chat_id None starts a new chat
            user_message: The user-authored message

        Returns:
            SendResult with the assistant (or fallback) message

        Raises:
            ValueError: If the message is empty or not authored by the user
            ModelNotFoundError, UserNotFoundError, ChatNotFoundError,
            InsufficientCreditsError: Pre-flight failures, nothing written
            PersistenceError: If a store write failed
        """
        if user_message.role != "user":
            raise ValueError("Only user messages can be sent")
        if not user_message.content or not user_message.content.strip():
            raise ValueError("Message cannot be empty")

        context.is_generating = True
        try:
            return await self._send(session, context, user_message)
        finally:
            # A cancelled caller leaves the tail running; its done-callback clears the flag
            if context.tail_task is None or context.tail_task.done():
                context.is_generating = False

    async def _send(self, session: Session, context: SendContext, user_message: ChatMessage) -> SendResult:
        cost = self.check_cost(session, context)

        created_chat = False
        if context.chat_id is None:
            context.title = derive_chat_title(user_message.content)
            chat = self._persist(
                session,
                "create_chat",
                lambda: crud.create_chat(
                    session=session,
                    user_id=context.user_id,
                    title=context.title,
                    messages=[user_message],
                ),
            )
            context.chat_id = chat.id
            context.history = [user_message]
            created_chat = True
            logger.info(f"Created chat {chat.id} for user {context.user_id}")
        else:
            chat = crud.get_chat(session, context.chat_id)
            if not chat or chat.user_id != context.user_id:
                raise ChatNotFoundError(context.chat_id)
            context.title = chat.title
            context.history = crud.get_chat_messages(session, chat.id) + [user_message]

        try:
            context.balance = self._persist(
                session,
                "debit_credits",
                lambda: crud.debit_user_credits(session=session, user_id=context.user_id, amount=cost),
            )
        except InsufficientCreditsError:
            # Balance changed since the check; undo the chat this send created
            if created_chat:
                self._discard_chat(session, context.chat_id)
            raise
        context.state = SendState.DEBITED
        logger.info(f"Debited {cost} credits from user {context.user_id}, balance now {context.balance}")

        if not created_chat:
            try:
                self._persist(
                    session,
                    "write_user_message",
                    lambda: crud.replace_chat_messages(
                        session=session, chat_id=context.chat_id, messages=context.history
                    ),
                )
            except PersistenceError:
                # Nothing was sent, so the debit must not stand
                self._refund(session, context)
                raise
        context.state = SendState.USER_MESSAGE_PERSISTED

        # From here on the send must settle even if the caller goes away.
        # The tail outlives the request, so it gets its own session.
        tail_task = asyncio.ensure_future(self._complete_and_settle(session.get_bind(), context))
        tail_task.add_done_callback(lambda task: self._finish_tail(task, context))
        context.tail_task = tail_task
        return await asyncio.shield(tail_task)

    def _finish_tail(self, task: "asyncio.Task[SendResult]", context: SendContext) -> None:
        context.is_generating = False
        if task.cancelled():
            logger.error(f"Send tail for chat {context.chat_id} was cancelled in state {context.state.value}")
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Send tail for chat {context.chat_id} failed in state {context.state.value}: {error}")

    async def _complete_and_settle(self, bind: Engine, context: SendContext) -> SendResult:
        context.state = SendState.AWAITING_COMPLETION
        with Session(bind) as session:
            try:
                reply = await self.completion_client.complete(context.history, context.model_name)
            except CompletionServiceError as e:
                logger.error(f"Completion failed for chat {context.chat_id}: {str(e)}")
                return self._refund_and_fallback(session, context)
            except Exception as e:
                logger.exception(f"Unexpected completion failure for chat {context.chat_id}: {str(e)}")
                return self._refund_and_fallback(session, context)

            self._append_to_history(session, context.chat_id, reply, "write_assistant_message")
            context.state = SendState.COMPLETED
            logger.info(f"Completion stored for chat {context.chat_id}")

        return SendResult(
            message=reply,
            chat_id=context.chat_id,
            title=context.title,
            remaining_credits=context.balance,
            state=context.state,
        )

    def _refund_and_fallback(self, session: Session, context: SendContext) -> SendResult:
        self._refund(session, context)

        fallback = ChatMessage(role="assistant", content=FALLBACK_MESSAGE)
        self._append_to_history(session, context.chat_id, fallback, "write_fallback_message")
        context.state = SendState.REFUNDED_AND_FALLBACK

        return SendResult(
            message=fallback,
            chat_id=context.chat_id,
            title=context.title,
            remaining_credits=context.balance,
            state=context.state,
            is_fallback=True,
        )

    def _refund(self, session: Session, context: SendContext) -> None:
        try:
            context.balance = self._persist(
                session,
                "refund_credits",
                lambda: crud.refund_user_credits(
                    session=session, user_id=context.user_id, amount=context.cost
                ),
            )
        except PersistenceError:
            logger.critical(
                f"Refund of {context.cost} credits for user {context.user_id} was not written; "
                f"balance is short by that amount"
            )
            raise
        logger.info(f"Refunded {context.cost} credits to user {context.user_id}")

    def _append_to_history(self, session: Session, chat_id: int, message: ChatMessage, operation: str) -> None:
        # Re-read so writes made since the send started are kept; last writer wins
        def write():
            current = crud.get_chat_messages(session, chat_id)
            return crud.replace_chat_messages(session=session, chat_id=chat_id, messages=current + [message])

        self._persist(session, operation, write)

    def _discard_chat(self, session: Session, chat_id: int) -> None:
        chat = crud.get_chat(session, chat_id)
        if chat:
            self._persist(session, "discard_chat", lambda: crud.delete_chat(session=session, chat=chat))
