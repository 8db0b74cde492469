"""Storage for conversion records"""

from .audit_log import AuditLog

__all__ = ["AuditLog"]
