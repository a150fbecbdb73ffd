"""Accumulator - folds stream events into the final message text."""

from typing import Dict, List, Optional

from streamchat.shared.entities import StreamEvent


class Accumulator:
    """Append-only text buffer plus per-choice completion state.

    A finish-reason event only marks its choice complete; any content it
    carries is dropped, as is content arriving for an already completed
    choice.
    """

    def __init__(self):
        self._parts: List[str] = []
        self._finish_reasons: Dict[int, str] = {}

    def fold(self, event: StreamEvent) -> Optional[str]:
        """Fold one event; return the text appended, if any."""
        if event.index in self._finish_reasons:
            return None
        if event.is_finished:
            self._finish_reasons[event.index] = event.finish_reason
            return None
        if not event.delta_content:
            return None
        self._parts.append(event.delta_content)
        return event.delta_content

    def result(self) -> str:
        return "".join(self._parts)

    @property
    def finish_reasons(self) -> Dict[int, str]:
        return dict(self._finish_reasons)

    def is_complete(self, index: int = 0) -> bool:
        return index in self._finish_reasons
