"""Data models for Lafite to mbox conversion"""

from .conversion_result import (
    BatchResult,
    ConversionIssue,
    ConversionResult,
    IssueType,
    Severity,
)
from .debug import DebugCategory
from .message import LafiteMessage, TEXT_FORMAT
from .stamp import StampRecord

__all__ = [
    "BatchResult",
    "ConversionIssue",
    "ConversionResult",
    "IssueType",
    "Severity",
    "DebugCategory",
    "LafiteMessage",
    "TEXT_FORMAT",
    "StampRecord",
]
