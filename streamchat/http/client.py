"""ChatCompletionClient - streaming client for OpenAI-compatible chat APIs."""

import uuid
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import httpx

from streamchat.exceptions import ClientError
from streamchat.shared.config import ClientSettings
from streamchat.shared.entities import Diagnostic
from streamchat.shared.logger import create_logger
from streamchat.shared.protocols import DiagnosticsSink, LoggingDiagnosticsSink
from streamchat.stream.session import StreamingSession

COMPLETIONS_PATH = "/chat/completions"


class HttpxResponseBody:
    """Adapts a streamed ``httpx.Response`` into a closable byte source."""

    def __init__(self, response: httpx.Response):
        self._response = response

    def __iter__(self) -> Iterator[bytes]:
        return self._response.iter_bytes()

    def close(self) -> None:
        self._response.close()


class ChatCompletionClient:
    """Sends one prompt per call and streams the reply through a StreamingSession.

    Example:
        settings = ClientSettings.from_env()
        with ChatCompletionClient(settings) as client:
            text, diagnostics = client.complete("Hello", on_delta=print)
    """

    def __init__(
        self,
        settings: ClientSettings,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._settings = settings
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self.logger = create_logger("streamchat.chat_client", settings.debug)

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "text/event-stream",
            "Authorization": f"Bearer {self._settings.api_key}",
        }

    def __enter__(self):
        kwargs: Dict[str, Any] = {}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        self._client = httpx.Client(
            base_url=self._settings.base_url.rstrip("/"),
            timeout=self._settings.timeout,
            headers=self._headers(),
            **kwargs,
        )
        return self

    def __exit__(self, *args):
        if self._client:
            self._client.close()
            self._client = None

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        """Build the chat-completion request body for a single user prompt."""
        return {
            "model": self._settings.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self._settings.max_tokens,
            "stream": True,
        }

    def complete(
        self,
        prompt: str,
        on_delta: Optional[Callable[[str], None]] = None,
        sink: Optional[DiagnosticsSink] = None,
    ) -> Tuple[str, List[Diagnostic]]:
        """POST the prompt with ``stream: true`` and consume the SSE reply.

        Connection failures before a response arrives raise ``httpx.HTTPError``;
        everything after that is reported through diagnostics.
        """
        if self._client is None:
            raise ClientError("ChatCompletionClient must be used as a context manager")

        payload = self.build_payload(prompt)
        session_id = uuid.uuid4().hex[:12]
        if sink is None:
            sink = LoggingDiagnosticsSink(self.logger, session_id=session_id)
        session = StreamingSession(sink=sink, on_delta=on_delta, session_id=session_id)

        self.logger.debug(
            "Sending chat completion request: %s",
            payload,
            extra={"session_id": session.session_id, "model": self._settings.model},
        )
        with self._client.stream("POST", COMPLETIONS_PATH, json=payload) as response:
            text, diagnostics = session.consume(response.status_code, HttpxResponseBody(response))

        self.logger.debug(
            "Stream ended (%s, finish_reason=%s, %d characters)",
            session.end_reason.value,
            session.finish_reason,
            len(text),
            extra={"session_id": session.session_id, "model": self._settings.model},
        )
        return text, diagnostics
