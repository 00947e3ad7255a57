import httpx
from fastapi.testclient import TestClient
from sqlmodel import Session

from beepboop import crud
from beepboop.api.deps import get_completion_client_dep
from beepboop.core.config import settings
from beepboop.core.send_protocol import FALLBACK_MESSAGE
from beepboop.main import app
from beepboop.tests.utils.completion import failing_client
from beepboop.tests.utils.user import create_random_user
from beepboop.tests.utils.utils import create_model

SEND_URL = f"{settings.API_V1_STR}/chat/send"


def _send(client: TestClient, user_id: int, model_name: str, content: str = "Hi", chat_id=None):
    return client.post(
        SEND_URL,
        json={
            "user_id": user_id,
            "model_name": model_name,
            "message": {"role": "user", "content": content},
            "chat_id": chat_id,
        },
    )


def test_send_starts_new_chat(client: TestClient, db: Session) -> None:
    user = create_random_user(db, credits=10)
    model = create_model(db, token_cost=2)

    r = _send(client, user.id, model.name, "Hello there")

    assert r.status_code == 200
    content = r.json()
    assert content["message"] == {"role": "assistant", "content": "Hello from the model"}
    assert content["remaining_credits"] == 8
    assert content["title"] == "Hello there"
    assert content["state"] == "completed"
    assert content["is_fallback"] is False
    assert [m.content for m in crud.get_chat_messages(db, content["chat_id"])] == [
        "Hello there",
        "Hello from the model",
    ]


def test_send_to_existing_chat(client: TestClient, db: Session) -> None:
    user = create_random_user(db, credits=10)
    model = create_model(db, token_cost=1)
    first = _send(client, user.id, model.name, "One").json()

    r = _send(client, user.id, model.name, "Two", chat_id=first["chat_id"])

    assert r.status_code == 200
    assert r.json()["chat_id"] == first["chat_id"]
    assert r.json()["remaining_credits"] == 8
    assert len(crud.get_chat_messages(db, first["chat_id"])) == 4


def test_send_insufficient_credits(client: TestClient, db: Session) -> None:
    user = create_random_user(db, credits=3)
    model = create_model(db, token_cost=5)

    r = _send(client, user.id, model.name)

    assert r.status_code == 402
    detail = r.json()["detail"]
    assert "requires 5 credits" in detail
    assert "You have 3 credits" in detail
    assert crud.get_user_chats(db, user.id) == []


def test_send_unknown_model(client: TestClient, db: Session) -> None:
    user = create_random_user(db, credits=10)

    r = _send(client, user.id, "no-such-model")

    assert r.status_code == 404
    db.refresh(user)
    assert user.credits == 10


def test_send_unknown_user(client: TestClient, db: Session) -> None:
    model = create_model(db)
    r = _send(client, 9999, model.name)
    assert r.status_code == 404


def test_send_to_missing_chat(client: TestClient, db: Session) -> None:
    user = create_random_user(db, credits=10)
    model = create_model(db)

    r = _send(client, user.id, model.name, chat_id=4242)

    assert r.status_code == 404
    db.refresh(user)
    assert user.credits == 10


def test_send_empty_message(client: TestClient, db: Session) -> None:
    user = create_random_user(db, credits=10)
    model = create_model(db)

    r = _send(client, user.id, model.name, "   ")

    assert r.status_code == 400
    assert r.json()["detail"] == "Message cannot be empty"


def test_send_requires_model_name(client: TestClient, db: Session) -> None:
    user = create_random_user(db, credits=10)
    r = _send(client, user.id, "")
    assert r.status_code == 422


def test_send_falls_back_when_completion_fails(client: TestClient, db: Session) -> None:
    user = create_random_user(db, credits=10)
    model = create_model(db, token_cost=2)
    app.dependency_overrides[get_completion_client_dep] = lambda: failing_client(
        lambda request: httpx.ConnectError("refused", request=request)
    )

    r = _send(client, user.id, model.name)

    assert r.status_code == 200
    content = r.json()
    assert content["message"] == {"role": "assistant", "content": FALLBACK_MESSAGE}
    assert content["is_fallback"] is True
    assert content["state"] == "refunded_and_fallback"
    assert content["remaining_credits"] == 10
