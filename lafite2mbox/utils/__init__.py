"""Utility functions"""

from .path_utils import find_lafite_files, mbox_path_for

__all__ = ["find_lafite_files", "mbox_path_for"]
