"""Configuration models for Lafite to mbox conversion."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from lafite2mbox.models.debug import DebugCategory


class ConversionConfig(BaseModel):
    """Per-message conversion settings."""

    program_name: str = "lafite2mbox"
    escape_from_lines: bool = True
    debug: list[DebugCategory] = Field(default_factory=list)

    @field_validator("program_name")
    def validate_program_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("program_name is required")
        if any(ch.isspace() for ch in v):
            raise ValueError("program_name must not contain whitespace")
        return v


class BatchConfig(BaseModel):
    """Directory conversion settings."""

    input_suffix: str = ".mail"
    output_suffix: str = ".mbox"
    create_output_dir: bool = True

    @field_validator("input_suffix", "output_suffix")
    def validate_suffix(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("Suffix must start with '.'")
        return v


class StorageConfig(BaseModel):
    """Storage configuration."""

    audit_log_path: Optional[str] = None

    def get_audit_log_path(self) -> Optional[Path]:
        """Get expanded audit log path, or None when auditing is off."""
        if not self.audit_log_path:
            return None
        return Path(self.audit_log_path).expanduser()


class AppConfig(BaseModel):
    """Main application configuration."""

    schema_version: str = "1.0"
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    @field_validator("schema_version")
    def validate_schema_version(cls, v: str) -> str:
        if not v:
            raise ValueError("schema_version is required")
        return v
