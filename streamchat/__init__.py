"""streamchat - console client for streaming chat completions.

The core is the SSE consumer in ``streamchat.stream``:
    - LineFramer: chunked bytes to text lines
    - EventParser: ``data:`` lines to StreamEvent / TERMINATION / Skip
    - Accumulator: ordered deltas to the final message
    - StreamingSession: owns one response body and drives the pipeline
"""

from streamchat.exceptions import ClientError, ConfigurationError, SessionError, StreamChatError
from streamchat.http.client import ChatCompletionClient
from streamchat.shared.config import ClientSettings
from streamchat.shared.entities import (
    TERMINATION,
    Diagnostic,
    DiagnosticKind,
    EndReason,
    Skip,
    StreamEvent,
    TerminationSignal,
)
from streamchat.shared.protocols import CollectingDiagnosticsSink, LoggingDiagnosticsSink
from streamchat.stream import Accumulator, EventParser, LineFramer, StreamingSession

__all__ = [
    "Accumulator",
    "ChatCompletionClient",
    "ClientError",
    "ClientSettings",
    "CollectingDiagnosticsSink",
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticKind",
    "EndReason",
    "EventParser",
    "LineFramer",
    "LoggingDiagnosticsSink",
    "SessionError",
    "Skip",
    "StreamChatError",
    "StreamEvent",
    "StreamingSession",
    "TERMINATION",
    "TerminationSignal",
]
