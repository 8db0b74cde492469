"""Exceptions raised while reading Laurel/Lafite mail files."""

from lafite2mbox.models.conversion_result import IssueType


class LafiteError(Exception):
    """Base exception for Lafite conversion errors."""

    issue_type = IssueType.IO_ERROR


class FramingError(LafiteError):
    """Raised when message boundaries cannot be determined reliably."""

    pass


class MissingStartMarkerError(FramingError):
    """Raised when a message does not begin with the *start* marker."""

    issue_type = IssueType.MISSING_START_MARKER


class MalformedStampError(FramingError):
    """Raised when the lengths and flags line does not match the stamp grammar."""

    issue_type = IssueType.MALFORMED_STAMP


class OverReadError(FramingError):
    """Raised when more bytes were read than the stamp declared."""

    issue_type = IssueType.OVER_READ


class TruncatedMessageError(FramingError):
    """Raised when the file ends before the declared message length."""

    issue_type = IssueType.TRUNCATED_MESSAGE


class ShortReadError(LafiteError):
    """Raised when fewer raw bytes are available than were requested."""

    issue_type = IssueType.SHORT_READ

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} bytes, read {actual} bytes")
