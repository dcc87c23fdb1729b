from __future__ import annotations

from typing import Optional


class LineCursor:
    """Read-only, rewindable view over a byte buffer, one line at a time.

    Lines are delimited by ``\\n``; a single trailing ``\\r`` is stripped so that
    CRLF files read the same as LF files. A last line without a terminator is
    still returned. Bytes are decoded as Latin-1 so any byte survives a round trip.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._line_no = 0

    @property
    def line_no(self) -> int:
        """1-indexed number of the line most recently returned, 0 before the first."""
        return self._line_no

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def is_blank(self) -> bool:
        return not self._data.strip()

    def next_line(self) -> Optional[str]:
        if self._pos >= len(self._data):
            return None
        end = self._data.find(b"\n", self._pos)
        if end < 0:
            raw = self._data[self._pos :]
            self._pos = len(self._data)
        else:
            raw = self._data[self._pos : end]
            self._pos = end + 1
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        self._line_no += 1
        return raw.decode("latin-1")

    def rewind(self) -> None:
        self._pos = 0
        self._line_no = 0
