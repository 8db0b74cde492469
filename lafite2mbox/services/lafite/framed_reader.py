"""Line and raw byte reads over a Laurel/Lafite input stream."""

from dataclasses import dataclass
from typing import BinaryIO, Optional

from .base import ShortReadError

LF = 10
CR = 13

# Bytes map 1:1 to characters, so character counts are byte counts.
ENCODING = "latin-1"


@dataclass(frozen=True)
class LineStatus:
    """
    Result of a line read.

    Attributes:
        chars: Characters read, without the line terminator
        eof: True at end of file, or when the read limit was exceeded
    """

    chars: str
    eof: bool

    @property
    def chars_read(self) -> int:
        return len(self.chars)


class FramedReader:
    """Read lines and raw bytes from a Lafite file, counting every byte consumed."""

    def __init__(self, stream: BinaryIO):
        """
        Initialize reader.

        Args:
            stream: Binary input stream positioned at the start of a message
        """
        self.stream = stream
        self.position = 0

    def _read_byte(self) -> int:
        data = self.stream.read(1)
        if not data:
            return -1
        self.position += 1
        return data[0]

    def read_line(self, limit: Optional[int] = None) -> LineStatus:
        """
        Read a line, consuming and discarding its LF or CR terminator.

        Args:
            limit: Number of characters allowed before the terminator. A line of
                exactly this length is returned with its terminator consumed;
                reading one more character stops the read. None means unbounded.

        Returns:
            LineStatus with the characters read. eof is True at end of file and
            also when the limit was exceeded; callers interpret it in context.
        """
        buffer = bytearray()
        while limit is None or len(buffer) <= limit:
            ch = self._read_byte()
            if ch == -1:
                return LineStatus(buffer.decode(ENCODING), True)
            if ch in (LF, CR):
                return LineStatus(buffer.decode(ENCODING), False)
            buffer.append(ch)
        return LineStatus(buffer.decode(ENCODING), True)

    def read_raw_bytes(self, count: int) -> bytes:
        """
        Read exactly count bytes with no line interpretation.

        Raises:
            ShortReadError: If the stream ends before count bytes are read
        """
        if count <= 0:
            return b""
        chunks = []
        remaining = count
        while remaining > 0:
            chunk = self.stream.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        data = b"".join(chunks)
        self.position += len(data)
        if len(data) != count:
            raise ShortReadError(count, len(data))
        return data

    def skip_ahead(self, count: int) -> None:
        """
        Discard count bytes.

        Raises:
            ShortReadError: If the stream ends first
        """
        self.read_raw_bytes(count)
