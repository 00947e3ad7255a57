import logging

from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from beepboop.core.config import settings
from beepboop.models.database import LLMModel

logger = logging.getLogger(__name__)


def build_engine(database_uri: str):
    """
    Create the SQLAlchemy engine for the given URI

    SQLite needs check_same_thread disabled because FastAPI runs sync
    dependencies in a threadpool; in-memory SQLite also needs a single
    shared connection.
    """
    if database_uri.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_uri or database_uri == "sqlite://":
            kwargs["poolclass"] = StaticPool
        return create_engine(database_uri, **kwargs)
    return create_engine(database_uri, pool_pre_ping=True)


engine = build_engine(settings.SQLALCHEMY_DATABASE_URI)


def init_db(session: Session) -> None:
    """
    Create tables and seed the default model if it is missing.
    """
    SQLModel.metadata.create_all(session.get_bind())

    model = session.exec(
        select(LLMModel).where(LLMModel.name == settings.DEFAULT_MODEL_NAME)
    ).first()
    if not model:
        model = LLMModel(
            name=settings.DEFAULT_MODEL_NAME,
            description="Default model",
            token_cost=settings.DEFAULT_MODEL_TOKEN_COST,
            model_path=settings.DEFAULT_MODEL_PATH,
        )
        session.add(model)
        session.commit()
        logger.info(f"Seeded default model: {settings.DEFAULT_MODEL_NAME}")
