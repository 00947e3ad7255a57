from typing import Any

from fastapi import APIRouter, HTTPException

from beepboop import crud
from beepboop.api.deps import SessionDep
from beepboop.core.errors import BookmarkLimitExceededError, ChatNotFoundError
from beepboop.models.database import Bookmark
from beepboop.models.schemas.bookmark import (
    BookmarkCreate, BookmarkPublic, BookmarksPublic, BookmarkUpdate,
)
from beepboop.models.schemas.message import SuccessResponse

router = APIRouter()


@router.get("/", response_model=BookmarksPublic)
def read_chat_bookmarks(chat_id: int, session: SessionDep) -> Any:
    """
    Retrieve bookmarks of a chat, newest first.
    """
    bookmarks = crud.get_chat_bookmarks(session, chat_id)
    return BookmarksPublic(data=bookmarks, count=len(bookmarks))


@router.post("/", response_model=BookmarkPublic, status_code=201)
def create_bookmark(bookmark_in: BookmarkCreate, session: SessionDep) -> Any:
    """
    Bookmark a message of a chat. A chat holds a limited number of bookmarks.
    """
    try:
        return crud.create_bookmark(session=session, bookmark_create=bookmark_in)
    except ChatNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BookmarkLimitExceededError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{bookmark_id}", response_model=BookmarkPublic)
def read_bookmark(bookmark_id: int, session: SessionDep) -> Any:
    bookmark = session.get(Bookmark, bookmark_id)
    if not bookmark:
        raise HTTPException(status_code=404, detail="Bookmark not found")
    return bookmark


@router.put("/{bookmark_id}", response_model=BookmarkPublic)
def update_bookmark(bookmark_id: int, bookmark_in: BookmarkUpdate, session: SessionDep) -> Any:
    bookmark = session.get(Bookmark, bookmark_id)
    if not bookmark:
        raise HTTPException(status_code=404, detail="Bookmark not found")

    if not bookmark_in.model_dump(exclude_unset=True):
        raise HTTPException(status_code=400, detail="No fields to update")

    return crud.update_bookmark(session=session, bookmark=bookmark, bookmark_in=bookmark_in)


@router.delete("/{bookmark_id}", response_model=SuccessResponse)
def delete_bookmark(bookmark_id: int, session: SessionDep) -> Any:
    bookmark = session.get(Bookmark, bookmark_id)
    if not bookmark:
        raise HTTPException(status_code=404, detail="Bookmark not found")

    crud.delete_bookmark(session=session, bookmark=bookmark)
    return SuccessResponse()
