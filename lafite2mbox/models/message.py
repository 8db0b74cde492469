"""Lafite message data model."""

from dataclasses import dataclass, field
from typing import List, Union

from .stamp import StampRecord

TEXT_FORMAT = "text"


@dataclass
class LafiteMessage:
    """
    One message read from a Laurel/Lafite mail file.

    Attributes:
        index: Position of the message in its file (0-based)
        stamp: Lengths and flags from the message stamp
        headers: Header lines in file order, without the Format: header
        body_format: Lowercased value of the Format: header ('text' if absent)
        body: Text lines for 'text' messages, raw bytes for any other format
        bytes_read: Bytes consumed from the start of the stamp
    """

    index: int
    stamp: StampRecord
    headers: List[str] = field(default_factory=list)
    body_format: str = TEXT_FORMAT
    body: Union[List[str], bytes] = field(default_factory=list)
    bytes_read: int = 0

    @property
    def is_binary(self) -> bool:
        return self.body_format != TEXT_FORMAT
