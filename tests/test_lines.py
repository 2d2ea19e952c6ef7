import io

import pytest

from pipexpy.lines import DEFAULT_BUFFER_SIZE, LineReader


def test_reads_lines_with_newlines_and_final_fragment():
    reader = LineReader(io.BytesIO(b"a\nbb\nccc"))
    assert reader.read_line() == b"a\n"
    assert reader.read_line() == b"bb\n"
    assert reader.read_line() == b"ccc"
    assert reader.read_line() is None


def test_empty_stream_gives_none():
    assert LineReader(io.BytesIO(b"")).read_line() is None


@pytest.mark.parametrize("size", [1, 2, 3, DEFAULT_BUFFER_SIZE, 64])
def test_lines_join_back_to_input(size):
    data = b"first line\n\nthird\nlast without newline"
    lines = list(LineReader(io.BytesIO(data), size))
    assert b"".join(lines) == data
    assert all(line.endswith(b"\n") for line in lines[:-1])


def test_text_streams_are_supported():
    lines = list(LineReader(io.StringIO("x\ny\n")))
    assert lines == ["x\n", "y\n"]


@pytest.mark.parametrize("size", [0, -3])
def test_non_positive_buffer_size_rejected(size):
    with pytest.raises(ValueError):
        LineReader(io.BytesIO(b"data"), size)


class _RecordingStream:
    def __init__(self, data):
        self._inner = io.BytesIO(data)
        self.requests = []

    def read(self, size):
        self.requests.append(size)
        return self._inner.read(size)


def test_reads_use_buffer_size():
    stream = _RecordingStream(b"abcdefghij\nk\n")
    list(LineReader(stream, 4))
    assert stream.requests
    assert set(stream.requests) == {4}


def test_readahead_is_kept_for_next_line():
    stream = _RecordingStream(b"a\nb\nc\n")
    reader = LineReader(stream, 64)
    assert reader.read_line() == b"a\n"
    assert reader.read_line() == b"b\n"
    assert len(stream.requests) == 1


def test_reading_after_exhaustion_stays_none():
    reader = LineReader(io.BytesIO(b"only\n"))
    assert list(reader) == [b"only\n"]
    assert reader.read_line() is None


class _FailingStream:
    def read(self, size):
        raise OSError("read failed")


def test_read_error_propagates():
    with pytest.raises(OSError):
        LineReader(_FailingStream()).read_line()