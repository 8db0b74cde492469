"""Conversion services"""

from .batch import FileConverter
from .lafite import (
    FramedReader,
    LafiteError,
    FramingError,
    MessageConverter,
    OutputWriter,
    ShortReadError,
    parse_stamp,
    resolve_content_type,
)

__all__ = [
    "FileConverter",
    "FramedReader",
    "LafiteError",
    "FramingError",
    "MessageConverter",
    "OutputWriter",
    "ShortReadError",
    "parse_stamp",
    "resolve_content_type",
]
