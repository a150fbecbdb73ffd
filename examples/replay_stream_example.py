"""Example: Replay a captured SSE body through a StreamingSession.

Useful for inspecting how a recorded response is assembled without
calling the API:

    uv run python examples/replay_stream_example.py capture.sse
"""

import sys

from streamchat import CollectingDiagnosticsSink, StreamingSession
from streamchat.stream import LineFramer


def _print_delta(text: str):
    sys.stdout.write(text)
    sys.stdout.flush()


def replay(path: str):
    sink = CollectingDiagnosticsSink()
    session = StreamingSession(sink=sink, on_delta=_print_delta)

    with open(path, "rb") as handle:
        chunks = iter(lambda: handle.read(64), b"")
        text, _ = session.consume(200, chunks)

    sys.stdout.write("\n\n")
    sys.stdout.write(f"end: {session.end_reason.value}, finish_reason: {session.finish_reason}\n")
    sys.stdout.write(f"characters: {len(text)}, diagnostics: {len(sink.diagnostics)}\n")
    for diagnostic in sink.diagnostics:
        sys.stdout.write(f"  - {diagnostic.kind.value}: {diagnostic.message}\n")

    with open(path, "rb") as handle:
        lines = sum(1 for _ in LineFramer.from_reader(handle))
    sys.stdout.write(f"lines: {lines}\n")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        sys.stderr.write("usage: replay_stream_example.py <capture.sse>\n")
        sys.exit(2)
    replay(sys.argv[1])
