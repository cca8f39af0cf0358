"""
Sinks: destinations that accept formatted log text.

- DiscardSink drops everything and never fails.
- ConsoleSink writes to sys.stdout or sys.stderr, looked up at write time.
- FileSink writes to the router's open log file and goes quiet once closed.
- TeeSink duplicates every write to each member sink.

SinkHandler adapts a sink to the stdlib logging.Handler interface so a
channel logger can format records and hand the text to exactly one sink.
"""

import logging
import sys
from typing import IO, List


class Sink:
    """Base sink interface."""

    def write(self, text: str) -> None:
        raise NotImplementedError

    def flush(self) -> None:
        pass


class DiscardSink(Sink):
    def write(self, text: str) -> None:
        pass

    def __repr__(self):
        return "DiscardSink()"


class ConsoleSink(Sink):
    """Writes to a standard stream, resolved by name on every write."""

    def __init__(self, stream_name: str):
        if stream_name not in ("stdout", "stderr"):
            raise ValueError(f"Unknown console stream: {stream_name!r}")
        self.stream_name = stream_name

    @property
    def stream(self) -> IO[str]:
        return getattr(sys, self.stream_name)

    def write(self, text: str) -> None:
        stream = self.stream
        stream.write(text)
        stream.flush()

    def flush(self) -> None:
        self.stream.flush()

    def __eq__(self, other):
        return isinstance(other, ConsoleSink) and other.stream_name == self.stream_name

    def __hash__(self):
        return hash(("console", self.stream_name))

    def __repr__(self):
        return f"ConsoleSink({self.stream_name!r})"


class FileSink(Sink):
    """Writes to an open text file handle owned by the router."""

    def __init__(self, handle: IO[str]):
        self.handle = handle

    @property
    def closed(self) -> bool:
        return self.handle.closed

    def write(self, text: str) -> None:
        if self.handle.closed:
            return
        self.handle.write(text)
        self.handle.flush()

    def flush(self) -> None:
        if not self.handle.closed:
            self.handle.flush()

    def close(self) -> None:
        self.handle.close()

    def __repr__(self):
        return f"FileSink({getattr(self.handle, 'name', '?')!r})"


class TeeSink(Sink):
    """
    Fan-out: every write goes to each member in order. A failing member does
    not stop the others; the first failure is re-raised afterwards.
    """

    def __init__(self, *sinks: Sink):
        self.sinks: List[Sink] = list(sinks)

    def write(self, text: str) -> None:
        first_error = None
        for sink in self.sinks:
            try:
                sink.write(text)
            except Exception as e:
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def flush(self) -> None:
        for sink in self.sinks:
            sink.flush()

    def __repr__(self):
        return f"TeeSink({', '.join(repr(s) for s in self.sinks)})"


class SinkHandler(logging.Handler):
    """Logging handler writing each formatted record, newline-terminated, to one sink."""

    terminator = "\n"

    def __init__(self, sink: Sink):
        super().__init__()
        self.sink = sink

    def emit(self, record):
        try:
            self.sink.write(self.format(record) + self.terminator)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)

    def flush(self):
        self.acquire()
        try:
            self.sink.flush()
        finally:
            self.release()
