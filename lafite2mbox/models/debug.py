"""Diagnostic tracing categories."""

from enum import Enum


class DebugCategory(Enum):
    """Independent categories of conversion tracing."""

    HEADERS = "headers"
    BODY = "body"
    UNDOCUMENTED_FLAGS = "undocumented-flags"
