import io

import pytest

from oraskit.lineio import read_line


@pytest.mark.parametrize(
    "data, want, left",
    [
        (b"", b"", b""),
        (b"\n", b"", b""),
        (b"\r", b"", b""),
        (b"\r\n", b"", b""),
        (b"foo", b"foo", b""),
        (b"foo\n", b"foo", b""),
        (b"foo\r", b"foo", b""),
        (b"foo\r\n", b"foo", b""),
        (b"foo\rbar", b"foo\rbar", b""),
        (b"foo\nbar", b"foo", b"bar"),
        (b"foo\r\nbar", b"foo", b"bar"),
    ],
)
def test_read_line(data, want, left):
    reader = io.BytesIO(data)
    assert read_line(reader) == want
    assert reader.read() == left


class FailingReader:
    def read(self, size=-1):
        raise OSError("mock error")


def test_read_line_error():
    with pytest.raises(OSError, match="mock error"):
        read_line(FailingReader())