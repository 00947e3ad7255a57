import json
from typing import Any, Callable, Dict, List

import httpx

from beepboop.core.llm import CompletionClient

TEST_COMPLETION_URL = "http://completion.test/v1/chat/completions"


def completion_body(content: str) -> Dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def make_completion_client(handler: Callable) -> CompletionClient:
    """CompletionClient whose HTTP traffic goes to the given MockTransport handler"""
    return CompletionClient(
        api_url=TEST_COMPLETION_URL,
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


def replying_client(content: str, captured: List[Dict[str, Any]] | None = None) -> CompletionClient:
    """CompletionClient that always answers with content; request bodies go to captured"""
    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(json.loads(request.content))
        return httpx.Response(200, json=completion_body(content))

    return make_completion_client(handler)


def failing_client(exc_factory: Callable[[httpx.Request], Exception]) -> CompletionClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_factory(request)

    return make_completion_client(handler)
