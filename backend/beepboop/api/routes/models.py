from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Query

from beepboop import crud
from beepboop.api.deps import SessionDep
from beepboop.core.errors import DuplicateModelError
from beepboop.models.schemas.llm_model import LLMModelCreate, LLMModelPublic, LLMModelsPublic

router = APIRouter()


@router.get("/", response_model=LLMModelsPublic)
def read_models(
    session: SessionDep,
    name: Optional[str] = Query(None, description="Exact model name to look up"),
) -> Any:
    """
    Retrieve models, optionally filtered by name.
    """
    models = crud.get_models(session, name=name)
    return LLMModelsPublic(data=models, count=len(models))


@router.post("/", response_model=LLMModelPublic, status_code=201)
def add_model(session: SessionDep, model_in: LLMModelCreate) -> Any:
    """
    Register a model that can be selected for chats.
    """
    try:
        return crud.create_model(session=session, model_create=model_in)
    except DuplicateModelError as e:
        raise HTTPException(status_code=409, detail=str(e))
