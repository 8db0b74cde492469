"""Laurel/Lafite mail file reading and mbox conversion."""

from .base import (
    FramingError,
    LafiteError,
    MalformedStampError,
    MissingStartMarkerError,
    OverReadError,
    ShortReadError,
    TruncatedMessageError,
)
from .content_type import is_binary_format, parse_format_header, resolve_content_type
from .framed_reader import FramedReader, LineStatus
from .message_converter import MessageConverter
from .output_writer import OutputWriter
from .stamp_parser import check_flags, is_start_marker, parse_stamp

__all__ = [
    "FramingError",
    "LafiteError",
    "MalformedStampError",
    "MissingStartMarkerError",
    "OverReadError",
    "ShortReadError",
    "TruncatedMessageError",
    "is_binary_format",
    "parse_format_header",
    "resolve_content_type",
    "FramedReader",
    "LineStatus",
    "MessageConverter",
    "OutputWriter",
    "check_flags",
    "is_start_marker",
    "parse_stamp",
]
