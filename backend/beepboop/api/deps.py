from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from beepboop.core.db import engine
from beepboop.core.llm import CompletionClient, get_completion_client
from beepboop.core.send_protocol import MessageSendProtocol


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]


def get_completion_client_dep() -> CompletionClient:
    return get_completion_client()


CompletionClientDep = Annotated[CompletionClient, Depends(get_completion_client_dep)]


def get_send_protocol(completion_client: CompletionClientDep) -> MessageSendProtocol:
    """
    Dependency for the message send protocol bound to the shared completion client
    """
    return MessageSendProtocol(completion_client)


SendProtocolDep = Annotated[MessageSendProtocol, Depends(get_send_protocol)]
