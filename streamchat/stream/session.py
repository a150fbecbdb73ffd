"""StreamingSession - drives one streamed chat-completion response."""

import uuid
from contextlib import closing, nullcontext
from typing import Callable, Iterable, List, Optional, Tuple, Union

import httpx

from streamchat.exceptions import SessionError
from streamchat.shared.entities import (
    TERMINATION,
    Diagnostic,
    DiagnosticKind,
    EndReason,
    Skip,
)
from streamchat.shared.protocols import DiagnosticsSink, LoggingDiagnosticsSink, ResponseBody
from streamchat.stream.accumulator import Accumulator
from streamchat.stream.framer import LineFramer
from streamchat.stream.parser import EventParser

SUCCESS_STATUS = 200
MAX_ERROR_BODY_BYTES = 4096

_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.StreamError, OSError)


def _owned(body: Union[ResponseBody, Iterable[bytes]]):
    if isinstance(body, ResponseBody):
        return closing(body)
    return nullcontext(body)


class StreamingSession:
    """Consumes exactly one response body and returns the assembled text.

    The session never raises for stream-level problems. Malformed events,
    non-success statuses and dropped connections become diagnostics that
    are forwarded to ``sink`` and returned from ``consume``.

    Example:
        session = StreamingSession(on_delta=lambda text: print(text, end=""))
        text, diagnostics = session.consume(response.status_code, body)
    """

    def __init__(
        self,
        sink: Optional[DiagnosticsSink] = None,
        on_delta: Optional[Callable[[str], None]] = None,
        parser: Optional[EventParser] = None,
        session_id: Optional[str] = None,
    ):
        self.session_id = session_id or uuid.uuid4().hex[:12]
        self._sink = sink if sink is not None else LoggingDiagnosticsSink(session_id=self.session_id)
        self._on_delta = on_delta
        self._parser = parser or EventParser()
        self.accumulator = Accumulator()
        self.diagnostics: List[Diagnostic] = []
        self.end_reason: Optional[EndReason] = None
        self._consumed = False

    @property
    def finish_reason(self) -> Optional[str]:
        """Finish reason reported for the first choice, if any."""
        return self.accumulator.finish_reasons.get(0)

    def consume(self, response_status: int, response_body: Union[ResponseBody, Iterable[bytes]]) -> Tuple[str, List[Diagnostic]]:
        """Read ``response_body`` to its end and return ``(text, diagnostics)``.

        The body is closed on every exit path when it is a ``ResponseBody``;
        a plain iterable of chunks is read as-is.
        """
        if self._consumed:
            raise SessionError("StreamingSession can only consume one response")
        self._consumed = True

        with _owned(response_body) as body:
            if response_status != SUCCESS_STATUS:
                self._reject(response_status, body)
            else:
                self._drive(body)

        return self.accumulator.result(), list(self.diagnostics)

    # -- Internals --

    def _drive(self, body: Iterable[bytes]) -> None:
        lines = iter(LineFramer(body))
        while True:
            try:
                line = next(lines)
            except StopIteration:
                self.end_reason = EndReason.END_OF_INPUT
                return
            except _TRANSPORT_ERRORS as exc:
                self.end_reason = EndReason.TRANSPORT_ERROR
                self._record(
                    Diagnostic(
                        kind=DiagnosticKind.TRANSPORT_FAILURE,
                        message=f"Stream interrupted after {len(self.accumulator.result())} characters: {exc}",
                        detail=type(exc).__name__,
                    )
                )
                return

            outcome = self._parser.parse(line)
            if outcome is TERMINATION:
                self.end_reason = EndReason.TERMINATED
                return
            if isinstance(outcome, Skip):
                if outcome.diagnostic is not None:
                    self._record(outcome.diagnostic)
                continue

            appended = self.accumulator.fold(outcome)
            if appended and self._on_delta is not None:
                self._on_delta(appended)

    def _reject(self, status: int, body: Iterable[bytes]) -> None:
        self.end_reason = EndReason.REJECTED
        try:
            detail = _read_prefix(body, MAX_ERROR_BODY_BYTES).decode("utf-8", errors="replace")
        except _TRANSPORT_ERRORS as exc:
            detail = f"<body unavailable: {exc}>"
        self._record(
            Diagnostic(
                kind=DiagnosticKind.NON_SUCCESS_STATUS,
                message=f"Request failed with HTTP status {status}",
                status_code=status,
                detail=detail,
            )
        )

    def _record(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        self._sink.emit(diagnostic)


def _read_prefix(body: Iterable[bytes], limit: int) -> bytes:
    buffer = bytearray()
    for chunk in body:
        buffer.extend(chunk)
        if len(buffer) >= limit:
            break
    return bytes(buffer[:limit])
