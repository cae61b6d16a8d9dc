import io

import pytest

from orka_plugins.bridge.diagnostics import DiagnosticBuffer


def test_text_before_drain_raises():
    buf = DiagnosticBuffer()
    assert buf.closed is False
    with pytest.raises(RuntimeError):
        _ = buf.text


def test_drain_collects_and_trims():
    buf = DiagnosticBuffer()
    buf.drain(io.BytesIO(b"\n  warning: x\nerror: y  \n"))
    assert buf.closed is True
    assert buf.text == "warning: x\nerror: y"


def test_drain_handles_large_and_invalid_utf8():
    buf = DiagnosticBuffer()
    buf.drain(io.BytesIO(b"a" * 10000 + b"\xff"))
    assert buf.text.startswith("a" * 10000)
    assert buf.text.endswith("\ufffd")


def test_closed_even_when_stream_fails():
    class Broken(io.RawIOBase):
        def read(self, size=-1):
            raise OSError("gone")

    buf = DiagnosticBuffer()
    with pytest.raises(OSError):
        buf.drain(Broken())
    assert buf.closed is True
    assert buf.text == ""
