from fastapi import APIRouter, HTTPException, status
import logging

from beepboop.api.deps import SessionDep, SendProtocolDep
from beepboop.core.errors import (
    ChatNotFoundError,
    InsufficientCreditsError,
    ModelNotFoundError,
    PersistenceError,
    UserNotFoundError,
)
from beepboop.core.send_protocol import SendContext
from beepboop.models.schemas.chat import SendMessageRequest, SendMessageResponse

# Configure logger
logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/send", response_model=SendMessageResponse)
async def send_message(
    send_request: SendMessageRequest,
    session: SessionDep,
    send_protocol: SendProtocolDep,
) -> SendMessageResponse:
    """
    Send a user message to a model, paying with the user's credits

    Args:
        send_request: The send request data
        session: Database session
        send_protocol: Message send protocol dependency

    Returns:
        The assistant reply, or the fallback apology if the model call failed
    """
    context = SendContext(
        user_id=send_request.user_id,
        model_name=send_request.model_name,
        chat_id=send_request.chat_id,
    )

    try:
        result = await send_protocol.send_message(session, context, send_request.message)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except InsufficientCreditsError as e:
        raise HTTPException(status_code=status.HTTP_402_PAYMENT_REQUIRED, detail=str(e))
    except (ModelNotFoundError, UserNotFoundError, ChatNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceError as e:
        logger.error(f"Send for user {send_request.user_id} left the store inconsistent: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while saving your message"
        )

    logger.info(f"Send for user {send_request.user_id} finished in state {result.state.value}")

    return SendMessageResponse(
        message=result.message,
        chat_id=result.chat_id,
        title=result.title,
        remaining_credits=result.remaining_credits,
        state=result.state.value,
        is_fallback=result.is_fallback,
    )
