"""Tests for streamchat.stream.StreamingSession."""

from __future__ import annotations

import random

import httpx
import pytest

from streamchat.exceptions import SessionError
from streamchat.shared.entities import DiagnosticKind, EndReason
from streamchat.shared.protocols import CollectingDiagnosticsSink
from streamchat.stream import StreamingSession


@pytest.fixture
def sink():
    return CollectingDiagnosticsSink()


def _split(data: bytes, cuts):
    points = sorted(set(cuts))
    pieces, start = [], 0
    for point in points:
        pieces.append(data[start:point])
        start = point
    pieces.append(data[start:])
    return pieces


class TestSessionScenarios:
    def test_hello_world_with_finish_and_done(self, sink, sse, done, make_body):
        body = make_body([sse("Hello"), sse(" world"), sse("", finish_reason="stop"), done])
        session = StreamingSession(sink=sink)
        text, diagnostics = session.consume(200, body)

        assert text == "Hello world"
        assert diagnostics == []
        assert session.end_reason is EndReason.TERMINATED
        assert session.finish_reason == "stop"
        assert body.closed

    def test_malformed_line_is_skipped(self, sink, sse, done, make_body):
        body = make_body([b"data: {broken\n\n", sse("ok"), done])
        text, diagnostics = StreamingSession(sink=sink).consume(200, body)

        assert text == "ok"
        assert len(diagnostics) == 1
        assert diagnostics[0].kind is DiagnosticKind.MALFORMED_EVENT
        assert sink.diagnostics == diagnostics

    def test_non_success_status(self, sink, make_body):
        body = make_body([b'{"error": "internal"}'])
        session = StreamingSession(sink=sink)
        text, diagnostics = session.consume(500, body)

        assert text == ""
        assert len(diagnostics) == 1
        diagnostic = diagnostics[0]
        assert diagnostic.kind is DiagnosticKind.NON_SUCCESS_STATUS
        assert diagnostic.status_code == 500
        assert diagnostic.detail == '{"error": "internal"}'
        assert session.end_reason is EndReason.REJECTED
        assert body.closed

    def test_non_success_body_read_failure_is_not_raised(self, sink, make_body):
        body = make_body([b"partial"], error=httpx.DecodingError("bad gzip"))
        text, diagnostics = StreamingSession(sink=sink).consume(502, body)

        assert text == ""
        assert diagnostics[0].kind is DiagnosticKind.NON_SUCCESS_STATUS
        assert "bad gzip" in diagnostics[0].detail
        assert body.closed

    def test_non_success_status_does_not_parse_events(self, sink, sse, make_body):
        seen = []
        body = make_body([sse("should not appear")])
        text, diagnostics = StreamingSession(sink=sink, on_delta=seen.append).consume(429, body)

        assert text == ""
        assert seen == []
        assert [d.kind for d in diagnostics] == [DiagnosticKind.NON_SUCCESS_STATUS]

    def test_empty_choices_does_not_crash(self, sink, sse, done, make_body):
        body = make_body([b'data: {"choices": []}\n\n', sse("after"), done])
        text, diagnostics = StreamingSession(sink=sink).consume(200, body)

        assert text == "after"
        assert [d.kind for d in diagnostics] == [DiagnosticKind.MALFORMED_EVENT]


class TestSessionTermination:
    def test_nothing_read_after_done(self, sink, sse, done, make_body):
        body = make_body([sse("a"), done, sse("never")])
        text, _ = StreamingSession(sink=sink).consume(200, body)

        assert text == "a"
        assert body.reads == 2
        assert body.closed

    def test_end_of_input_without_done(self, sink, sse, make_body):
        body = make_body([sse("partial"), sse(" text")])
        session = StreamingSession(sink=sink)
        text, diagnostics = session.consume(200, body)

        assert text == "partial text"
        assert diagnostics == []
        assert session.end_reason is EndReason.END_OF_INPUT

    @pytest.mark.parametrize(
        "error",
        [
            httpx.ReadError("connection reset"),
            httpx.RemoteProtocolError("peer closed"),
            httpx.DecodingError("invalid stored block lengths"),
            OSError("broken pipe"),
        ],
    )
    def test_transport_error_keeps_partial_text(self, sink, sse, make_body, error):
        body = make_body([sse("half"), sse(" way")], error=error)
        session = StreamingSession(sink=sink)
        text, diagnostics = session.consume(200, body)

        assert text == "half way"
        assert [d.kind for d in diagnostics] == [DiagnosticKind.TRANSPORT_FAILURE]
        assert session.end_reason is EndReason.TRANSPORT_ERROR
        assert body.closed

    def test_session_is_single_use(self, sink, done, make_body):
        session = StreamingSession(sink=sink)
        session.consume(200, make_body([done]))
        with pytest.raises(SessionError):
            session.consume(200, make_body([done]))

    def test_plain_iterable_body_is_accepted(self, sink, sse, done):
        text, _ = StreamingSession(sink=sink).consume(200, [sse("x"), done])
        assert text == "x"


class TestSessionOrdering:
    def test_observer_sees_fold_order(self, sink, sse, done, make_body):
        seen = []
        pieces = ["a", "", "b", "c"]
        body = make_body([sse(p) for p in pieces] + [sse("", finish_reason="stop"), done])
        text, _ = StreamingSession(sink=sink, on_delta=seen.append).consume(200, body)

        assert seen == ["a", "b", "c"]
        assert "".join(seen) == text

    def test_skip_and_continue_preserves_order(self, sink, sse, done, make_body):
        body = make_body([sse("one "), b"data: nope\n\n", b": ping\n\n", sse("two"), done])
        text, diagnostics = StreamingSession(sink=sink).consume(200, body)

        assert text == "one two"
        assert len(diagnostics) == 1

    def test_chunk_boundaries_do_not_change_result(self, sink, sse, done):
        stream = b"".join(
            [sse("Bonjour"), b": keep-alive\n\n", sse(", "), sse("le monde 🌍"), sse("", finish_reason="stop"), done]
        )
        expected = "Bonjour, le monde 🌍"
        rng = random.Random(7)

        for _ in range(25):
            cuts = [rng.randrange(1, len(stream)) for _ in range(rng.randrange(1, 12))]
            text, diagnostics = StreamingSession(sink=sink).consume(200, _split(stream, cuts))
            assert text == expected
            assert diagnostics == []

        bytewise = [stream[i:i + 1] for i in range(len(stream))]
        text, _ = StreamingSession(sink=sink).consume(200, bytewise)
        assert text == expected
