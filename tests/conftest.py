"""Shared fixtures for building Lafite mail files."""

from datetime import datetime
from typing import List, Optional

import pytest

# "*start*" plus the lengths and flags line, each with a one-byte terminator
STAMP_LENGTH = 24

FIXED_TIME = datetime(2025, 1, 2, 3, 4, 5)


def build_message(
    headers: List[str],
    body: bytes = b"",
    flags: str = "UU ",
    message_length: Optional[int] = None,
    terminator: bytes = b"\r",
) -> bytes:
    """
    Build one framed Lafite message.

    Args:
        headers: Header lines (the blank separator line is added)
        body: Body bytes, including line terminators
        flags: Deleted, seen and trailing flag characters
        message_length: Declared length (default: the actual length)
        terminator: Line terminator for the stamp and headers
    """
    header_block = b"".join(h.encode("latin-1") + terminator for h in headers) + terminator
    actual_length = STAMP_LENGTH + len(header_block) + len(body)
    if message_length is None:
        message_length = actual_length
    stamp = f"*start*\r{message_length:05d} {STAMP_LENGTH:05d} {flags}\r".encode("latin-1")
    return stamp + header_block + body


def text_body(*lines: str) -> bytes:
    return b"".join(line.encode("latin-1") + b"\r" for line in lines)


@pytest.fixture
def fixed_clock():
    """Clock that always returns the same timestamp."""
    return lambda: FIXED_TIME
