"""Core domain entities for streamchat."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class DiagnosticKind(str, Enum):
    """Categories of non-fatal problems observed while consuming a stream."""

    MALFORMED_EVENT = "malformed_event"
    NON_SUCCESS_STATUS = "non_success_status"
    TRANSPORT_FAILURE = "transport_failure"


class EndReason(str, Enum):
    """How a streaming session stopped reading."""

    TERMINATED = "terminated"
    END_OF_INPUT = "end_of_input"
    TRANSPORT_ERROR = "transport_error"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Diagnostic:
    """Observational record of something that went wrong.

    Diagnostics never change control flow on their own. They are handed to
    a ``DiagnosticsSink`` and returned alongside the session result.
    """

    kind: DiagnosticKind
    message: str
    status_code: Optional[int] = None
    detail: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return non-None fields as a dict."""
        raw = asdict(self)
        raw["kind"] = self.kind.value
        return {k: v for k, v in raw.items() if v is not None}


@dataclass(frozen=True)
class StreamEvent:
    """One decoded server message for a single choice.

    ``role``, ``tool_calls`` and ``usage`` are carried through untouched;
    nothing in the stream pipeline looks inside them.
    """

    index: int = 0
    delta_content: str = ""
    finish_reason: Optional[str] = None
    role: Optional[str] = None
    tool_calls: Optional[Any] = None
    usage: Optional[Any] = None

    @property
    def is_finished(self) -> bool:
        return self.finish_reason is not None


class TerminationSignal:
    """Marker meaning no more events will arrive."""

    _instance: Optional["TerminationSignal"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "TERMINATION"


TERMINATION = TerminationSignal()


@dataclass(frozen=True)
class Skip:
    """A line that contributes nothing, optionally with the reason why."""

    diagnostic: Optional[Diagnostic] = None
