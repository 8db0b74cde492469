"""Audit logging for conversion events."""

import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from lafite2mbox.models.conversion_result import BatchResult, ConversionResult


class AuditLog:
    """Append-only JSON-lines record of file conversions."""

    def __init__(self, log_path: Path):
        """
        Initialize audit logger.

        Args:
            log_path: Path to audit log file (parent directories are created)
        """
        self.log_path = log_path
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log_conversion(self, result: ConversionResult) -> None:
        """
        Log the outcome of converting one file.

        Args:
            result: Conversion result; failed results are logged as 'file_failed'
        """
        fatal = result.fatal_issue
        event = {
            "timestamp": datetime.now().isoformat(),
            "event_type": "file_converted" if fatal is None else "file_failed",
            "input_path": str(result.input_path) if result.input_path else None,
            "output_path": str(result.output_path) if result.output_path else None,
            "messages_converted": result.messages_converted,
            "error_details": fatal.details if fatal else None,
            "issues": [issue.to_dict() for issue in result.issues],
        }

        self._write_event(event)

    def log_batch(self, batch: BatchResult) -> None:
        """
        Log the summary of a directory conversion.

        Args:
            batch: Batch result
        """
        event = {
            "timestamp": datetime.now().isoformat(),
            "event_type": "batch_finished",
            "input_dir": str(batch.input_dir),
            "output_dir": str(batch.output_dir),
            "files_total": batch.total,
            "files_succeeded": batch.succeeded,
            "files_failed": batch.failed,
        }

        self._write_event(event)

    def read_events(self, event_type: Optional[str] = None) -> List[dict]:
        """
        Read logged events, skipping lines that are not valid JSON.

        Args:
            event_type: Only return events of this type

        Returns:
            Events in the order they were written
        """
        events = []

        if self.log_path.exists():
            with open(self.log_path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line:
                        try:
                            event = json.loads(line)
                        except json.JSONDecodeError:
                            continue
                        if event_type is None or event.get("event_type") == event_type:
                            events.append(event)

        return events

    def export_events(self, output_path: Path) -> None:
        """
        Export all events to a JSON file.

        Args:
            output_path: Path to output JSON file
        """
        events = self.read_events()

        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(events, f, indent=2, ensure_ascii=False)

    def _write_event(self, event: dict) -> None:
        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(event, ensure_ascii=False) + "\n")
