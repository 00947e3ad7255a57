from sqlmodel import SQLModel


class Message(SQLModel):
    """Generic message response"""
    message: str


class SuccessResponse(SQLModel):
    success: bool = True
