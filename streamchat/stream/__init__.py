"""Streaming-response consumer: framing, parsing and accumulation."""

from streamchat.stream.accumulator import Accumulator
from streamchat.stream.framer import LineFramer
from streamchat.stream.parser import DATA_PREFIX, DONE_SENTINEL, EventParser
from streamchat.stream.session import SUCCESS_STATUS, StreamingSession

__all__ = [
    "Accumulator",
    "LineFramer",
    "EventParser",
    "StreamingSession",
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "SUCCESS_STATUS",
]
