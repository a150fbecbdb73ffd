"""HTTP collaborator for streamchat."""

from streamchat.http.client import ChatCompletionClient, HttpxResponseBody

__all__ = [
    "ChatCompletionClient",
    "HttpxResponseBody",
]
