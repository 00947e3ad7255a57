import random
import string
from decimal import Decimal

from sqlmodel import Session

from beepboop import crud
from beepboop.models.database import LLMModel
from beepboop.models.schemas.llm_model import LLMModelCreate


def random_lower_string(k: int = 32) -> str:
    return "".join(random.choices(string.ascii_lowercase, k=k))


def random_email() -> str:
    return f"{random_lower_string()}@{random_lower_string(8)}.com"


def create_model(db: Session, token_cost: Decimal | int = 1, name: str | None = None) -> LLMModel:
    model_in = LLMModelCreate(
        name=name or f"model-{random_lower_string(8)}",
        model_path=f"test/{random_lower_string(8)}",
        token_cost=Decimal(str(token_cost)),
    )
    return crud.create_model(session=db, model_create=model_in)
