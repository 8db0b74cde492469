"""Format header handling and MIME content types."""

import re
from typing import Optional

from lafite2mbox.models.message import TEXT_FORMAT

TEDIT_FORMAT = "tedit"

TEDIT_MIME_TYPE = "application/vnd.interlisp.tedit"
PLAIN_TEXT_MIME_TYPE = "text/plain; charset=x-xerox-xccs"
UNKNOWN_MIME_TYPE = "application/octet-stream"

CONTENT_TYPES = {
    TEDIT_FORMAT: TEDIT_MIME_TYPE,
    TEXT_FORMAT: PLAIN_TEXT_MIME_TYPE,
}

FORMAT_PATTERN = re.compile(r"^Format: *(.*)$", re.IGNORECASE)


def resolve_content_type(format_token: str) -> str:
    """
    Map a Format: value to a MIME content type.

    Examples:
        >>> resolve_content_type("TEdit")
        'application/vnd.interlisp.tedit'
        >>> resolve_content_type("text")
        'text/plain; charset=x-xerox-xccs'
        >>> resolve_content_type("sketch")
        'application/octet-stream'
    """
    return CONTENT_TYPES.get(format_token.lower(), UNKNOWN_MIME_TYPE)


def parse_format_header(line: str) -> Optional[str]:
    """Return the lowercased value of a Format: header line, or None."""
    match = FORMAT_PATTERN.match(line)
    if not match:
        return None
    return match.group(1).lower()


def is_binary_format(format_token: str) -> bool:
    """Anything but plain text is copied verbatim."""
    return format_token != TEXT_FORMAT
