"""Single-file and directory conversion drivers."""

import logging
from pathlib import Path
from typing import Optional

from lafite2mbox.config.app_config import AppConfig
from lafite2mbox.models.conversion_result import (
    BatchResult,
    ConversionIssue,
    ConversionResult,
    IssueType,
    Severity,
)
from lafite2mbox.services.lafite.message_converter import MessageConverter
from lafite2mbox.storage.audit_log import AuditLog
from lafite2mbox.utils.path_utils import find_lafite_files, mbox_path_for


class FileConverter:
    """
    Convert Lafite files on disk to mbox files.

    Every file is converted independently: a failure is recorded in that
    file's ConversionResult and never stops the rest of a directory.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        audit_log: Optional[AuditLog] = None,
        logger: Optional[logging.Logger] = None,
        converter: Optional[MessageConverter] = None,
    ):
        """
        Initialize file converter.

        Args:
            config: Application configuration (defaults if omitted)
            audit_log: Optional audit log receiving one event per file
            logger: Logger for progress and failures
            converter: Message converter (built from config if omitted)
        """
        self.config = config or AppConfig()
        self.audit_log = audit_log
        self.logger = logger or logging.getLogger(__name__)
        self.converter = converter or MessageConverter(
            program_name=self.config.conversion.program_name,
            escape_from_lines=self.config.conversion.escape_from_lines,
            debug=self.config.conversion.debug,
            logger=self.logger,
        )

    def convert_file(self, lafite_path: Path, mbox_path: Path) -> ConversionResult:
        """
        Convert one Lafite file to an mbox file.

        Args:
            lafite_path: Lafite input file
            mbox_path: mbox output file (overwritten)

        Returns:
            ConversionResult; an unreadable input or unwritable output is a fatal IO_ERROR
        """
        self.logger.info("Converting %s to %s", lafite_path, mbox_path)
        result = ConversionResult(input_path=lafite_path, output_path=mbox_path)

        try:
            with open(lafite_path, "rb") as lafite_file, open(mbox_path, "wb") as mbox_file:
                self.converter.convert(lafite_file, mbox_file, result)
        except OSError as e:
            result.issues.append(
                ConversionIssue(
                    issue_type=IssueType.IO_ERROR,
                    severity=Severity.FATAL,
                    message_index=None,
                    details=str(e),
                )
            )

        if not result.success:
            self.logger.error("Error converting %s: %s", lafite_path, result.fatal_issue.details)

        if self.audit_log is not None:
            self.audit_log.log_conversion(result)

        return result

    def convert_directory(self, input_dir: Path, output_dir: Path) -> BatchResult:
        """
        Convert every Lafite file in input_dir into output_dir.

        Files are selected by the configured input suffix and written as
        '<original name><output suffix>'.

        Args:
            input_dir: Directory holding the Lafite files
            output_dir: Directory for the mbox files (created if missing and allowed)

        Returns:
            BatchResult with one ConversionResult per input file

        Raises:
            NotADirectoryError: If input_dir is not a directory
            FileNotFoundError: If output_dir is missing and may not be created
        """
        if not input_dir.is_dir():
            raise NotADirectoryError(f"indir '{input_dir}' is not a directory")

        if not output_dir.is_dir():
            if not self.config.batch.create_output_dir:
                raise FileNotFoundError(f"outdir '{output_dir}' does not exist")
            self.logger.warning("Directory '%s' does not exist; creating it", output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)

        batch = BatchResult(input_dir=input_dir, output_dir=output_dir)
        lafite_files = find_lafite_files(input_dir, self.config.batch.input_suffix)
        if not lafite_files:
            self.logger.warning(
                "Directory '%s' contains no %s files", input_dir, self.config.batch.input_suffix
            )

        self.logger.info("Converting files in %s to %s", input_dir, output_dir)
        for lafite_path in lafite_files:
            mbox_path = mbox_path_for(lafite_path, output_dir, self.config.batch.output_suffix)
            batch.results.append(self.convert_file(lafite_path, mbox_path))

        self.logger.info(
            "Finished converting files in %s: %d of %d converted",
            input_dir,
            batch.succeeded,
            batch.total,
        )

        if self.audit_log is not None:
            self.audit_log.log_batch(batch)

        return batch
