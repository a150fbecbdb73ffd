"""EventParser - turns SSE lines into stream events.

Only ``data:`` lines carry information. Each payload is either the
``[DONE]`` sentinel or a chat-completion chunk::

    data: {"choices":[{"index":0,"delta":{"content":"Hi"},"finish_reason":null}]}

Anything that does not fit that shape becomes a ``Skip`` carrying a
``malformed_event`` diagnostic, so one bad event never ends the stream.
"""

import json
from typing import Any, Dict, Union

from streamchat.shared.entities import (
    TERMINATION,
    Diagnostic,
    DiagnosticKind,
    Skip,
    StreamEvent,
    TerminationSignal,
)

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"
MAX_DETAIL_CHARS = 512

ParseResult = Union[StreamEvent, TerminationSignal, Skip]

_IGNORED = Skip()


class EventParser:
    """Stateless parser from one raw line to one ``ParseResult``."""

    def parse(self, line: str) -> ParseResult:
        if not line.startswith(DATA_PREFIX):
            return _IGNORED

        payload = line[len(DATA_PREFIX):].strip()
        if not payload:
            return _IGNORED

        if payload == DONE_SENTINEL:
            return TERMINATION

        try:
            chunk = json.loads(payload)
        except json.JSONDecodeError as exc:
            return self._malformed(f"Invalid JSON in stream event: {exc}", payload)

        if not isinstance(chunk, dict):
            return self._malformed("Stream event is not a JSON object", payload)

        choices = chunk.get("choices")
        if not isinstance(choices, list):
            return self._malformed("Stream event has no choices list", payload)
        if not choices:
            return self._malformed("Stream event has an empty choices list", payload)

        return self._event_from_choice(choices[0], chunk, payload)

    def _event_from_choice(self, choice: Any, chunk: Dict[str, Any], payload: str) -> ParseResult:
        if not isinstance(choice, dict):
            return self._malformed("Stream choice is not a JSON object", payload)

        delta = choice.get("delta")
        if delta is None:
            delta = {}
        if not isinstance(delta, dict):
            return self._malformed("Stream choice delta is not a JSON object", payload)

        content = delta.get("content")
        if content is None:
            content = ""
        elif not isinstance(content, str):
            return self._malformed("Stream delta content is not a string", payload)

        index = choice.get("index", 0)
        if not isinstance(index, int) or isinstance(index, bool):
            return self._malformed("Stream choice index is not an integer", payload)

        finish_reason = choice.get("finish_reason")
        if finish_reason is not None:
            finish_reason = str(finish_reason)

        return StreamEvent(
            index=index,
            delta_content=content,
            finish_reason=finish_reason,
            role=delta.get("role"),
            tool_calls=delta.get("tool_calls"),
            usage=chunk.get("usage"),
        )

    @staticmethod
    def _malformed(message: str, payload: str) -> Skip:
        return Skip(
            Diagnostic(
                kind=DiagnosticKind.MALFORMED_EVENT,
                message=message,
                detail=payload[:MAX_DETAIL_CHARS],
            )
        )
