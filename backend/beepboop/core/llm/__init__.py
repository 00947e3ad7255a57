from beepboop.core.llm.completion_client import (
    CompletionClient, get_completion_client, clear_completion_client,
)

__all__ = [
    "CompletionClient", "get_completion_client", "clear_completion_client",
]
