"""Laurel/Lafite to mbox message conversion.

A Lafite file is a run of messages, each framed only by the byte count in
its stamp:

    *start*
    01659 00024 UUF
    <header lines>
    <blank line>
    <body>

The message length counts every byte from the start of the marker line
through the final line terminator of the body, so the reader tracks each
byte it consumes and never reads a line past the declared end.
"""

import logging
from datetime import datetime
from typing import BinaryIO, Callable, Iterable, Iterator, List, Optional

from lafite2mbox.models.conversion_result import (
    ConversionIssue,
    ConversionResult,
    IssueType,
    Severity,
)
from lafite2mbox.models.debug import DebugCategory
from lafite2mbox.models.message import LafiteMessage
from lafite2mbox.models.stamp import StampRecord
from .base import LafiteError, MissingStartMarkerError, OverReadError, TruncatedMessageError
from .content_type import is_binary_format, parse_format_header
from .framed_reader import FramedReader, LineStatus
from .output_writer import OutputWriter
from .stamp_parser import START_MARKER, check_flags, is_start_marker, parse_stamp

DEFAULT_PROGRAM_NAME = "lafite2mbox"

# Line terminators are one byte (CR or LF).
NEWLINE_LENGTH = 1


class MessageConverter:
    """
    Convert the messages of a Lafite file to mbox entries.

    Each message goes through the same states: find the *start* marker,
    parse the stamp, read headers up to the blank line, resolve the body
    format, read the body, then check the byte count and emit it.
    """

    def __init__(
        self,
        program_name: str = DEFAULT_PROGRAM_NAME,
        escape_from_lines: bool = True,
        debug: Optional[Iterable[DebugCategory]] = None,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize converter.

        Args:
            program_name: Sender written on each mbox 'From ' line
            escape_from_lines: Prefix text body lines starting with 'From ' with '>'
            debug: Tracing categories to log at INFO level
            logger: Logger for diagnostics (default: this module's logger)
            clock: Returns the timestamp for 'From ' lines (default: datetime.now)
        """
        self.program_name = program_name
        self.escape_from_lines = escape_from_lines
        self.debug = frozenset(debug or ())
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock or datetime.now

    def is_tracing(self, category: DebugCategory) -> bool:
        return category in self.debug

    def convert(
        self,
        input_stream: BinaryIO,
        output_stream: BinaryIO,
        result: Optional[ConversionResult] = None,
    ) -> ConversionResult:
        """
        Convert every message in input_stream and write them to output_stream.

        A framing or short-read error stops the conversion and is recorded as
        the result's fatal issue; messages already written stay written.

        Args:
            input_stream: Binary Lafite input, positioned at the first marker
            output_stream: Binary mbox output
            result: Result to fill in (a new one is created if omitted)

        Returns:
            ConversionResult with the message count and any issues
        """
        if result is None:
            result = ConversionResult()

        reader = FramedReader(input_stream)
        writer = OutputWriter(output_stream, escape_from_lines=self.escape_from_lines)

        try:
            for message in self.iter_messages(reader, result):
                writer.write_message(message, self.program_name, self.clock())
                result.messages_converted += 1
        except LafiteError as e:
            self.logger.error(
                "Conversion stopped at message %d (byte %d): %s",
                result.messages_converted,
                reader.position,
                e,
            )
            result.issues.append(
                ConversionIssue(
                    issue_type=e.issue_type,
                    severity=Severity.FATAL,
                    message_index=result.messages_converted,
                    details=str(e),
                )
            )
        else:
            self.logger.info("Processed %d message(s)", result.messages_converted)
        finally:
            writer.flush()

        return result

    def iter_messages(
        self,
        reader: FramedReader,
        result: Optional[ConversionResult] = None,
    ) -> Iterator[LafiteMessage]:
        """
        Yield the messages of a Lafite file in order.

        Args:
            reader: Reader positioned at a *start* marker (or end of file)
            result: If given, flag anomalies are recorded on it as warnings

        Raises:
            FramingError: If the marker, stamp or message length is invalid
            ShortReadError: If a binary body is shorter than declared
        """
        index = 0
        while True:
            status = reader.read_line()
            if status.eof and status.chars_read == 0:
                return
            if not is_start_marker(status.chars):
                self.logger.error("Expected '%s', got '%s'", START_MARKER, status.chars)
                raise MissingStartMarkerError(f"{START_MARKER} not found, got {status.chars!r}")

            stamp = parse_stamp(reader.read_line().chars)
            self._check_stamp(stamp, index, result)

            yield self.read_message(reader, stamp, index)
            index += 1

    def read_message(self, reader: FramedReader, stamp: StampRecord, index: int) -> LafiteMessage:
        """
        Read the headers and body that follow a parsed stamp.

        Args:
            reader: Reader positioned just after the stamp lines
            stamp: The message's stamp
            index: 0-based position of the message in its file

        Returns:
            The complete message

        Raises:
            TruncatedMessageError: If the file ends before the declared length
            ShortReadError: If a binary body is shorter than declared
            OverReadError: If more than message_length + 1 bytes were consumed
        """
        message = LafiteMessage(index=index, stamp=stamp, bytes_read=stamp.stamp_length)
        message_length = stamp.message_length

        self._read_headers(reader, message)

        if is_binary_format(message.body_format):
            remaining = max(message_length - message.bytes_read, 0)
            message.body = reader.read_raw_bytes(remaining)
            message.bytes_read += remaining
        else:
            message.body = self._read_text_body(reader, message)

        # the final line terminator may fall outside the declared length
        if message.bytes_read > message_length + NEWLINE_LENGTH:
            self.logger.error(
                "Read too far: bytes read = %d, should be %d", message.bytes_read, message_length
            )
            raise OverReadError(
                f"Read too far in message {index}: {message.bytes_read} bytes read, "
                f"declared length {message_length}"
            )

        return message

    def _read_bounded_line(self, reader: FramedReader, message: LafiteMessage) -> LineStatus:
        message_length = message.stamp.message_length
        status = reader.read_line(message_length - message.bytes_read - 1)
        message.bytes_read += status.chars_read + NEWLINE_LENGTH
        if status.eof and message.bytes_read < message_length:
            raise TruncatedMessageError(
                f"End of file in message {message.index} after {message.bytes_read} "
                f"of {message_length} bytes"
            )
        return status

    def _read_headers(self, reader: FramedReader, message: LafiteMessage) -> None:
        tracing = self.is_tracing(DebugCategory.HEADERS)
        while message.bytes_read < message.stamp.message_length:
            status = self._read_bounded_line(reader, message)
            line = status.chars
            if tracing:
                self.logger.info("Header> '%s'", line)

            body_format = parse_format_header(line)
            if body_format is not None:
                if tracing:
                    self.logger.info("Format is %s", body_format)
                message.body_format = body_format
            elif status.chars_read == 0:
                break
            else:
                message.headers.append(line)

    def _read_text_body(self, reader: FramedReader, message: LafiteMessage) -> List[str]:
        tracing = self.is_tracing(DebugCategory.BODY)
        lines = []
        while message.bytes_read < message.stamp.message_length:
            line = self._read_bounded_line(reader, message).chars
            if tracing:
                self.logger.info("> '%s'", line)
            lines.append(line)
        return lines

    def _check_stamp(
        self,
        stamp: StampRecord,
        index: int,
        result: Optional[ConversionResult],
    ) -> None:
        for issue_type, details in check_flags(stamp):
            self.logger.warning("Message %d: %s", index, details)
            if issue_type is IssueType.UNDOCUMENTED_FLAG and self.is_tracing(
                DebugCategory.UNDOCUMENTED_FLAGS
            ):
                self.logger.info("Message %d has undocumented flag '%s'", index, stamp.flag)

            if result is not None:
                result.issues.append(
                    ConversionIssue(
                        issue_type=issue_type,
                        severity=Severity.WARNING,
                        message_index=index,
                        details=details,
                    )
                )
