"""mbox serialization of converted messages."""

from datetime import datetime
from typing import BinaryIO

from lafite2mbox.models.message import LafiteMessage
from .content_type import resolve_content_type
from .framed_reader import ENCODING

NEWLINE = b"\n"

MBOX_DATE_FORMAT = "%a %b %d %H:%M:%S %Y"

REPAIRED_HEADER = "X-Message-Repaired"


class OutputWriter:
    """Write lines and raw bytes to an mbox output stream."""

    def __init__(self, stream: BinaryIO, escape_from_lines: bool = True):
        """
        Initialize writer.

        Args:
            stream: Binary output stream
            escape_from_lines: Prefix text body lines starting with 'From ' with '>'
        """
        self.stream = stream
        self.escape_from_lines = escape_from_lines
        self.bytes_written = 0

    def write(self, text: str) -> None:
        """Write text without a line terminator."""
        self.write_raw(text.encode(ENCODING))

    def write_line(self, text: str = "") -> None:
        """Write text followed by a linefeed."""
        self.write_raw(text.encode(ENCODING) + NEWLINE)

    def write_raw(self, data: bytes) -> None:
        self.stream.write(data)
        self.bytes_written += len(data)

    def write_header(self, name: str, value: str) -> None:
        self.write_line(f"{name}: {value}")

    def write_from_line(self, sender: str, when: datetime) -> None:
        """Write the 'From ' line that starts every mbox message."""
        self.write_line(f"From {sender} {when.strftime(MBOX_DATE_FORMAT)}")

    def write_body_line(self, line: str) -> None:
        if self.escape_from_lines and line.startswith("From "):
            self.write(">")
        self.write_line(line)

    def write_message(self, message: LafiteMessage, sender: str, when: datetime) -> None:
        """
        Write one message as an mbox entry.

        Layout:
            From <sender> <date>
            <copied headers>
            Content-Type: <type for the Format: header>
            X-Message-Repaired: true          (hand-repaired messages only)
            <blank line>
            <body>

        Args:
            message: Message read from the Lafite file
            sender: Sender for the 'From ' line
            when: Timestamp for the 'From ' line
        """
        self.write_from_line(sender, when)
        for header in message.headers:
            self.write_line(header)
        self.write_header("Content-Type", resolve_content_type(message.body_format))
        if message.stamp.is_fixed:
            self.write_header(REPAIRED_HEADER, "true")
        self.write_line()

        if message.is_binary:
            self.write_raw(message.body)
            # the next 'From ' line must start a line of its own
            if not message.body.endswith(NEWLINE):
                self.write_raw(NEWLINE)
        else:
            for line in message.body:
                self.write_body_line(line)

    def flush(self) -> None:
        self.stream.flush()
