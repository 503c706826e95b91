"""Audit logging for relay-authz."""

from .log_schema import AUDIT_FIELDS, AuditRecord, create_record
from .recorder import AuditRecorder

__all__ = [
    'AUDIT_FIELDS',
    'AuditRecord',
    'create_record',
    'AuditRecorder',
]
