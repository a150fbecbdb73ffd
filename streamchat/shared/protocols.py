"""Protocol definitions for the streaming pipeline's collaborators."""

import logging
from typing import Iterator, List, Optional, Protocol, runtime_checkable

from streamchat.shared.entities import Diagnostic
from streamchat.shared.logger import create_logger


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Receives diagnostics emitted by a streaming session."""

    def emit(self, diagnostic: Diagnostic) -> None: ...


@runtime_checkable
class ResponseBody(Protocol):
    """A byte source exclusively owned by one session until closed."""

    def __iter__(self) -> Iterator[bytes]: ...
    def close(self) -> None: ...


class LoggingDiagnosticsSink:
    """Writes each diagnostic to a structured JSON logger at WARNING."""

    def __init__(self, logger: Optional[logging.Logger] = None, session_id: Optional[str] = None):
        self.logger = logger or create_logger("streamchat.stream")
        self._session_id = session_id

    def emit(self, diagnostic: Diagnostic) -> None:
        self.logger.warning(
            diagnostic.message,
            extra={"diagnostic": diagnostic, "session_id": self._session_id},
        )


class CollectingDiagnosticsSink:
    """Keeps diagnostics in memory, mostly useful in tests and embedding code."""

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
