"""Audit logging package."""

from ledgerline.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
