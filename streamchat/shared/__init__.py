"""Shared utilities and foundational types for streamchat."""

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
from streamchat.shared.logger import create_logger
from streamchat.shared.protocols import (
    CollectingDiagnosticsSink,
    DiagnosticsSink,
    LoggingDiagnosticsSink,
    ResponseBody,
)

__all__ = [
    "ClientSettings",
    "Diagnostic",
    "DiagnosticKind",
    "EndReason",
    "Skip",
    "StreamEvent",
    "TERMINATION",
    "TerminationSignal",
    "create_logger",
    "CollectingDiagnosticsSink",
    "DiagnosticsSink",
    "LoggingDiagnosticsSink",
    "ResponseBody",
]
