"""File and directory conversion drivers."""

from .file_converter import FileConverter

__all__ = ["FileConverter"]
