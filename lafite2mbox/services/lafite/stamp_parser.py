"""Stamp line parsing for Laurel/Lafite messages.

Every message starts with a two-line stamp:

    *start*
    01659 00024 UUF

The second line holds the total message length, the stamp length, and
three single-character flags: deleted, seen, and a trailing flag that
is a space, 'F' for a hand-repaired message, or an undocumented value.
"""

from typing import List, Tuple

from lafite2mbox.models.conversion_result import IssueType
from lafite2mbox.models.stamp import StampRecord
from .base import MalformedStampError

START_MARKER = "*start*"

DIGITS = "0123456789"
LENGTH_WIDTH = 5
STAMP_LINE_LENGTH = 2 * LENGTH_WIDTH + 2 + 3


def is_start_marker(line: str) -> bool:
    return line == START_MARKER


def _is_length_field(text: str) -> bool:
    return len(text) == LENGTH_WIDTH and all(ch in DIGITS for ch in text)


def parse_stamp(line: str) -> StampRecord:
    """
    Decode the lengths and flags line of a stamp.

    The whole line must be five digits, a space, five digits, a space,
    then the deleted, seen and trailing flag characters.

    Args:
        line: Stamp line without its terminator

    Returns:
        StampRecord with the decoded values

    Raises:
        MalformedStampError: If the line does not match the stamp grammar
    """
    if len(line) != STAMP_LINE_LENGTH:
        raise MalformedStampError(f"Lengths and flags not found: {line!r}")

    message_length = line[0:5]
    stamp_length = line[6:11]
    if (
        not _is_length_field(message_length)
        or line[5] != " "
        or not _is_length_field(stamp_length)
        or line[11] != " "
    ):
        raise MalformedStampError(f"Lengths and flags not found: {line!r}")

    return StampRecord(
        message_length=int(message_length),
        stamp_length=int(stamp_length),
        deleted=line[12],
        seen=line[13],
        flag=line[14],
    )


def check_flags(stamp: StampRecord) -> List[Tuple[IssueType, str]]:
    """
    List the flag values outside their documented alphabets.

    Returns:
        (issue type, description) pairs; empty for an ordinary stamp
    """
    anomalies = []
    if stamp.is_deleted_anomalous:
        anomalies.append((IssueType.DELETED_FLAG_ANOMALY, f"Deleted flag = {stamp.deleted!r}"))
    if stamp.is_seen_anomalous:
        anomalies.append((IssueType.SEEN_FLAG_ANOMALY, f"Seen flag = {stamp.seen!r}"))
    if stamp.is_undocumented_flag:
        anomalies.append((IssueType.UNDOCUMENTED_FLAG, f"Undocumented flag = {stamp.flag!r}"))
    return anomalies
