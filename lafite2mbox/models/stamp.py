"""Stamp record data model."""

from dataclasses import dataclass

DELETED_FLAGS = ("U", "D")
SEEN_FLAGS = ("S", "U")
FIXED_FLAG = "F"
DOCUMENTED_FLAGS = (" ", FIXED_FLAG)


@dataclass(frozen=True)
class StampRecord:
    """
    Lengths and flags decoded from a message stamp.

    Attributes:
        message_length: Total bytes in the message, stamp included
        stamp_length: Bytes in the two stamp lines (included in message_length)
        deleted: Deleted flag, 'D' or 'U'
        seen: Seen flag, 'S' or 'U'
        flag: Trailing flag, ' ' normally or 'F' when the message was fixed by hand
    """

    message_length: int
    stamp_length: int
    deleted: str
    seen: str
    flag: str

    @property
    def is_deleted(self) -> bool:
        return self.deleted == "D"

    @property
    def is_seen(self) -> bool:
        return self.seen == "S"

    @property
    def is_fixed(self) -> bool:
        """True if the message was manually repaired."""
        return self.flag == FIXED_FLAG

    @property
    def is_undocumented_flag(self) -> bool:
        """True if the trailing flag is neither space nor 'F'."""
        return self.flag not in DOCUMENTED_FLAGS

    @property
    def is_deleted_anomalous(self) -> bool:
        return self.deleted not in DELETED_FLAGS

    @property
    def is_seen_anomalous(self) -> bool:
        return self.seen not in SEEN_FLAGS
