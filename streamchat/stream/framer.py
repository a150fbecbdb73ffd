"""LineFramer - reassembles text lines from a chunked byte stream."""

import codecs
from typing import Iterable, Iterator

DEFAULT_READ_SIZE = 4096


class LineFramer:
    """Lazy, forward-only sequence of lines over a byte stream.

    Chunks may split lines (and multibyte characters) at any point; a line
    is only yielded once its terminator has arrived, or once the stream
    ends with a non-empty remainder. Trailing ``\\r``/``\\n`` are stripped.

    Example:
        for line in LineFramer(response.iter_bytes()):
            print(line)
    """

    def __init__(self, chunks: Iterable[bytes], encoding: str = "utf-8"):
        self._chunks = chunks
        self._encoding = encoding

    @classmethod
    def from_reader(cls, reader, read_size: int = DEFAULT_READ_SIZE, encoding: str = "utf-8") -> "LineFramer":
        """Frame any object exposing a blocking ``read(n)`` method."""

        def _read_chunks() -> Iterator[bytes]:
            while True:
                data = reader.read(read_size)
                if not data:
                    return
                yield data

        return cls(_read_chunks(), encoding=encoding)

    def __iter__(self) -> Iterator[str]:
        decoder = codecs.getincrementaldecoder(self._encoding)(errors="replace")
        pending = ""
        for chunk in self._chunks:
            if not chunk:
                continue
            pending += decoder.decode(chunk)
            if "\n" not in pending:
                continue
            *lines, pending = pending.split("\n")
            for line in lines:
                yield line.rstrip("\r")

        pending += decoder.decode(b"", final=True)
        pending = pending.rstrip("\r")
        if pending:
            yield pending
