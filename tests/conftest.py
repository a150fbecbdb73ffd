"""Shared fixtures for streamchat tests."""

from __future__ import annotations

import json

import pytest


class FakeBody:
    """In-memory response body that records reads and closing."""

    def __init__(self, chunks, error=None):
        self.chunks = list(chunks)
        self.error = error
        self.reads = 0
        self.closed = False

    def __iter__(self):
        for chunk in self.chunks:
            self.reads += 1
            yield chunk
        if self.error is not None:
            raise self.error

    def close(self):
        self.closed = True


def chunk_line(content=None, finish_reason=None, index=0, **extra) -> bytes:
    delta = {} if content is None else {"content": content}
    payload = {
        "id": "chatcmpl-1",
        "object": "chat.completion.chunk",
        "model": "deepseek-ai/DeepSeek-R1",
        "choices": [{"index": index, "delta": delta, "finish_reason": finish_reason}],
    }
    payload.update(extra)
    return b"data: " + json.dumps(payload).encode("utf-8") + b"\n\n"


DONE = b"data: [DONE]\n\n"


@pytest.fixture
def make_body():
    return FakeBody


@pytest.fixture
def sse():
    """Build one SSE ``data:`` line from delta content and finish reason."""
    return chunk_line


@pytest.fixture
def done():
    return DONE
