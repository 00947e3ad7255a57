from typing import Any, List

from fastapi import APIRouter, HTTPException

from beepboop import crud
from beepboop.api.deps import SessionDep
from beepboop.core.errors import UserNotFoundError
from beepboop.models.schemas.chat import ChatCreate, ChatPublic, ChatUpdate
from beepboop.models.schemas.message import SuccessResponse

router = APIRouter()


@router.get("/", response_model=List[ChatPublic])
def read_user_chats(user_id: int, session: SessionDep) -> Any:
    """
    Retrieve all chats of a user, most recently updated first.
    """
    return crud.get_user_chats(session, user_id)


@router.post("/", response_model=ChatPublic, status_code=201)
def create_chat(chat_in: ChatCreate, session: SessionDep) -> Any:
    """
    Create a new chat, optionally seeded with messages.
    """
    try:
        return crud.create_chat(
            session=session,
            user_id=chat_in.user_id,
            title=chat_in.title,
            messages=chat_in.messages,
        )
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{chat_id}", response_model=ChatPublic)
def read_chat(chat_id: int, session: SessionDep) -> Any:
    chat = crud.get_chat(session, chat_id)
    if not chat:
        raise HTTPException(status_code=404, detail="Chat not found")
    return chat


@router.put("/{chat_id}", response_model=ChatPublic)
def update_chat(chat_id: int, chat_in: ChatUpdate, session: SessionDep) -> Any:
    """
    Update a chat's title and/or replace its whole message history.
    """
    chat = crud.get_chat(session, chat_id)
    if not chat:
        raise HTTPException(status_code=404, detail="Chat not found")

    if chat_in.title is None and chat_in.messages is None:
        raise HTTPException(status_code=400, detail="No fields to update")

    return crud.update_chat(
        session=session,
        chat=chat,
        title=chat_in.title,
        messages=chat_in.messages,
    )


@router.delete("/{chat_id}", response_model=SuccessResponse)
def delete_chat(chat_id: int, session: SessionDep) -> Any:
    """
    Delete a chat together with its bookmarks.
    """
    chat = crud.get_chat(session, chat_id)
    if not chat:
        raise HTTPException(status_code=404, detail="Chat not found")

    crud.delete_chat(session=session, chat=chat)
    return SuccessResponse()
