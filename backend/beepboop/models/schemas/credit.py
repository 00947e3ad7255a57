from decimal import Decimal

from sqlmodel import Field, SQLModel

from .common import Credits
from .user import UserPublic


class UpdateCredit(SQLModel):
    """Schema for setting a user's credits to an absolute value"""
    credits: Decimal = Field(ge=0)


class CreditAdd(SQLModel):
    """Schema for adding credits"""
    amount: Decimal = Field(gt=0)


class CreditAddResponse(SQLModel):
    """Schema for credit top-up response"""
    success: bool = True
    previous_credits: Credits
    added_credits: Credits
    new_credits: Credits
    user: UserPublic
