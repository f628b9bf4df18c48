"""Tests for eagles/forms/pdf_stream.py: chunk ordering and settle-once."""

import io

import pytest

from eagles.forms.errors import QuoteRenderError
from eagles.forms.pdf_stream import ChunkCollector, StreamSink


class TestChunkCollector:

    def test_chunks_joined_in_order(self):
        c = ChunkCollector("q1")
        for chunk in (b"%PDF", b"-1.4\n", b"body", b"%%EOF"):
            c.feed(chunk)
        assert c.finish() is True
        assert c.future.result() == b"%PDF-1.4\nbody%%EOF"

    def test_empty_stream(self):
        c = ChunkCollector()
        c.finish()
        assert c.future.result() == b""

    def test_finish_once(self):
        c = ChunkCollector()
        c.feed(b"a")
        assert c.finish() is True
        c.feed(b"b")
        assert c.finish() is False
        assert c.future.result() == b"a"

    def test_failure_wraps_original(self):
        c = ChunkCollector("q1")
        c.feed(b"partial")
        boom = OSError("disk full")
        assert c.fail(boom) is True
        with pytest.raises(QuoteRenderError) as exc_info:
            c.future.result()
        assert exc_info.value.original is boom
        assert exc_info.value.__cause__ is boom

    def test_render_error_passed_through(self):
        c = ChunkCollector()
        err = QuoteRenderError("already wrapped")
        c.fail(err)
        assert c.future.exception() is err

    def test_late_error_ignored(self):
        c = ChunkCollector()
        c.feed(b"data")
        c.finish()
        assert c.fail(RuntimeError("late")) is False
        assert c.future.result() == b"data"

    def test_finish_after_failure_ignored(self):
        c = ChunkCollector()
        c.fail(ValueError("bad"))
        assert c.finish() is False
        assert isinstance(c.future.exception(), QuoteRenderError)

    def test_settled_flag(self):
        c = ChunkCollector()
        assert not c.settled
        c.finish()
        assert c.settled


class TestStreamSink:

    def test_forwards_writes(self):
        c = ChunkCollector()
        sink = StreamSink(c)
        assert sink.write(b"abc") == 3
        sink.write(bytearray(b"def"))
        c.finish()
        assert c.future.result() == b"abcdef"

    def test_is_writable_binary_file(self):
        sink = StreamSink(ChunkCollector())
        assert isinstance(sink, io.RawIOBase)
        assert sink.writable()
        assert not sink.readable()

    def test_closed_sink_rejects_writes(self):
        sink = StreamSink(ChunkCollector())
        sink.close()
        with pytest.raises(ValueError):
            sink.write(b"x")
