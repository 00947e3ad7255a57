from fastapi import APIRouter

from beepboop.api.routes import bookmarks, chat, chats, models, users

api_router = APIRouter()
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(models.router, prefix="/models", tags=["models"])
api_router.include_router(chats.router, prefix="/chats", tags=["chats"])
api_router.include_router(bookmarks.router, prefix="/bookmarks", tags=["bookmarks"])
api_router.include_router(chat.router, prefix="/chat", tags=["chat"])
