"""Conversion result data models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class Severity(Enum):
    """How an issue affects the conversion of its file."""

    FATAL = "fatal"
    WARNING = "warning"


class IssueType(Enum):
    """Type of conversion issue."""

    MISSING_START_MARKER = "missing_start_marker"
    MALFORMED_STAMP = "malformed_stamp"
    OVER_READ = "over_read"
    TRUNCATED_MESSAGE = "truncated_message"
    SHORT_READ = "short_read"
    IO_ERROR = "io_error"
    DELETED_FLAG_ANOMALY = "deleted_flag_anomaly"
    SEEN_FLAG_ANOMALY = "seen_flag_anomaly"
    UNDOCUMENTED_FLAG = "undocumented_flag"


@dataclass
class ConversionIssue:
    """
    A problem found while converting a file.

    Attributes:
        issue_type: Type of issue
        severity: FATAL aborts the file, WARNING is logged and conversion continues
        message_index: 0-based index of the message concerned (None if not tied to one)
        details: Human-readable description
    """

    issue_type: IssueType
    severity: Severity
    message_index: Optional[int]
    details: str

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.FATAL

    def to_dict(self) -> dict:
        return {
            "issue_type": self.issue_type.value,
            "severity": self.severity.value,
            "message_index": self.message_index,
            "details": self.details,
        }


@dataclass
class ConversionResult:
    """
    Outcome of converting one Lafite file.

    Attributes:
        input_path: Lafite file read (None for in-memory streams)
        output_path: mbox file written (None for in-memory streams)
        messages_converted: Number of messages fully written to the output
        issues: Warnings and at most one fatal issue, in the order found
    """

    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    messages_converted: int = 0
    issues: List[ConversionIssue] = field(default_factory=list)

    @property
    def fatal_issue(self) -> Optional[ConversionIssue]:
        for issue in self.issues:
            if issue.is_fatal:
                return issue
        return None

    @property
    def success(self) -> bool:
        return self.fatal_issue is None

    @property
    def warnings(self) -> List[ConversionIssue]:
        return [issue for issue in self.issues if not issue.is_fatal]


@dataclass
class BatchResult:
    """Outcome of converting a directory of Lafite files."""

    input_dir: Path
    output_dir: Path
    results: List[ConversionResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for result in self.results if result.success)

    @property
    def failed(self) -> int:
        return len(self.results) - self.succeeded

    @property
    def total(self) -> int:
        return len(self.results)
