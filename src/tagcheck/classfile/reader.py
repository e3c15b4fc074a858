"""Bounds-checked big-endian reader over an in-memory class file."""

from __future__ import annotations

import struct

from tagcheck.core.errors import ParseError

_U2 = struct.Struct(">H")
_U4 = struct.Struct(">I")
_S4 = struct.Struct(">i")
_S8 = struct.Struct(">q")
_F4 = struct.Struct(">f")
_F8 = struct.Struct(">d")


class ByteReader:
    """Sequential cursor over class file bytes.

    Every read checks the remaining length first, so a short buffer
    surfaces as ``ParseError.truncated`` rather than a ``struct.error``.
    """

    __slots__ = ("_data", "_pos", "source")

    def __init__(self, data: bytes, *, source: str | None = None) -> None:
        self._data = memoryview(data)
        self._pos = 0
        self.source = source

    @property
    def offset(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, n: int) -> memoryview:
        if n < 0 or self.remaining < n:
            raise ParseError.truncated(self.source, self._pos, n, self.remaining)
        start = self._pos
        self._pos += n
        return self._data[start : self._pos]

    def u1(self) -> int:
        return self._take(1)[0]

    def u2(self) -> int:
        return _U2.unpack(self._take(2))[0]

    def u4(self) -> int:
        return _U4.unpack(self._take(4))[0]

    def s4(self) -> int:
        return _S4.unpack(self._take(4))[0]

    def s8(self) -> int:
        return _S8.unpack(self._take(8))[0]

    def f4(self) -> float:
        return _F4.unpack(self._take(4))[0]

    def f8(self) -> float:
        return _F8.unpack(self._take(8))[0]

    def read_bytes(self, n: int) -> bytes:
        return self._take(n).tobytes()

    def skip(self, n: int) -> None:
        self._take(n)


def decode_modified_utf8(raw: bytes) -> str:
    """Decode JVM modified UTF-8 (JVMS 4.4.7).

    Differs from standard UTF-8 in two ways: NUL is the two-byte ``C0 80``
    and supplementary characters are stored as two 3-byte surrogates.
    """
    if b"\xc0\x80" in raw:
        raw = raw.replace(b"\xc0\x80", b"\x00")
    text = raw.decode("utf-8", errors="surrogatepass")
    if any("\ud800" <= ch <= "\udfff" for ch in text):
        # Re-pair surrogate halves; unpaired halves are kept as-is
        text = text.encode("utf-16-le", errors="surrogatepass").decode(
            "utf-16-le", errors="surrogatepass"
        )
    return text
