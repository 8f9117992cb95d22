"""Audit logging."""

from .logger import AuditLogger, get_audit_logger

__all__ = ['AuditLogger', 'get_audit_logger']
