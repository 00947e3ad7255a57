from typing import Any

from fastapi import APIRouter, HTTPException

from beepboop import crud
from beepboop.api.deps import SessionDep
from beepboop.core.errors import DuplicateUserError, UserNotFoundError
from beepboop.models.schemas.credit import CreditAdd, CreditAddResponse, UpdateCredit
from beepboop.models.schemas.user import UserCreate, UserPublic, UsersPublic

router = APIRouter()


@router.get("/", response_model=UsersPublic)
def read_users(session: SessionDep, skip: int = 0, limit: int = 100) -> Any:
    """
    Retrieve users.
    """
    users, count = crud.get_users(session, skip=skip, limit=limit)
    return UsersPublic(data=users, count=count)


@router.post("/", response_model=UserPublic, status_code=201)
def create_user(session: SessionDep, user_in: UserCreate) -> Any:
    """
    Create new user with the default credit balance.
    """
    try:
        return crud.create_user(session=session, user_create=user_in)
    except DuplicateUserError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/{user_id}", response_model=UserPublic)
def read_user_by_id(user_id: int, session: SessionDep) -> Any:
    """
    Get a specific user by id.
    """
    user = crud.get_user(session, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{user_id}/credits", response_model=UserPublic)
def update_user_credits(user_id: int, credit_in: UpdateCredit, session: SessionDep) -> Any:
    """
    Set a user's credits to an absolute value.
    """
    user = crud.get_user(session, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return crud.set_user_credits(session=session, user=user, credits=credit_in.credits)


@router.post("/{user_id}/add-credits", response_model=CreditAddResponse)
def add_credits(user_id: int, credit_in: CreditAdd, session: SessionDep) -> Any:
    """
    Add credits to a user's account.
    """
    try:
        previous, user = crud.add_user_credits(session=session, user_id=user_id, amount=credit_in.amount)
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")

    return CreditAddResponse(
        previous_credits=previous,
        added_credits=credit_in.amount,
        new_credits=user.credits,
        user=UserPublic.model_validate(user),
    )
