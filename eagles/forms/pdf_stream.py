"""
Streamed PDF output -> one Future[bytes].

reportlab writes the finished document into whatever file object the canvas
was given. StreamSink is that file object: every write() is forwarded as a
chunk to a ChunkCollector, which buffers chunks in order and settles its
Future exactly once:

    finish()  -> Future result is b"".join(chunks)
    fail(exc) -> Future raises QuoteRenderError (chunks discarded)

Whichever terminal signal arrives first wins; anything after it is ignored.
"""

import io
import logging
import threading
from concurrent.futures import Future

from .errors import QuoteRenderError

log = logging.getLogger("eagles.pdf_stream")


class ChunkCollector:
    def __init__(self, label=""):
        self.label = label
        self.future = Future()
        self._chunks = []
        self._settled = False
        self._lock = threading.Lock()

    @property
    def settled(self):
        return self._settled

    def feed(self, chunk):
        with self._lock:
            if self._settled:
                return
            self._chunks.append(bytes(chunk))
        log.debug("PDF chunk received for %s: %d bytes", self.label, len(chunk))

    def finish(self):
        with self._lock:
            if self._settled:
                return False
            self._settled = True
            data = b"".join(self._chunks)
            self._chunks = []
        log.debug("PDF stream for %s ended: %d bytes", self.label, len(data))
        self.future.set_result(data)
        return True

    def fail(self, exc):
        with self._lock:
            if self._settled:
                log.debug("Ignoring late error for %s: %s", self.label, exc)
                return False
            self._settled = True
            self._chunks = []
        if isinstance(exc, QuoteRenderError):
            err = exc
        else:
            err = QuoteRenderError(f"PDF generation failed: {exc}", original=exc)
            err.__cause__ = exc
        log.error("PDF generation error for %s: %s", self.label, exc)
        self.future.set_exception(err)
        return True


class StreamSink(io.RawIOBase):
    """Write-only binary file object that forwards writes to a collector."""

    def __init__(self, collector: ChunkCollector):
        super().__init__()
        self.collector = collector

    def writable(self):
        return True

    def write(self, b):
        if self.closed:
            raise ValueError("write to closed sink")
        self.collector.feed(b)
        return len(b)
