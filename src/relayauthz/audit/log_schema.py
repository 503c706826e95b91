"""
Audit record schema.
Every admission decision produces one record with a fixed field set.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass

from ..config import AUDIT_EVENT_ADMISSION
from ..identity.keys import key_to_hex
from ..policy.model import AdmissionRequest, AdmissionDecision

# Stable field taxonomy; every record carries all of these keys
AUDIT_FIELDS = (
    'event',
    'decision',
    'reason',
    'auth_pubkey',
    'event_pubkey',
    'event_id',
    'kind',
)


@dataclass(frozen=True)
class AuditRecord:
    """
    Represents a single admission audit record.

    auth_pubkey is None when the request carried no identity and "" when
    it carried an empty one.
    """
    decision: str
    reason: str
    auth_pubkey: Optional[str]
    event_pubkey: Optional[str]
    event_id: Optional[str]
    kind: Optional[int]
    event: str = AUDIT_EVENT_ADMISSION

    def to_dict(self) -> Dict[str, Any]:
        """Convert audit record to dictionary."""
        return {
            'event': self.event,
            'decision': self.decision,
            'reason': self.reason,
            'auth_pubkey': self.auth_pubkey,
            'event_pubkey': self.event_pubkey,
            'event_id': self.event_id,
            'kind': self.kind,
        }


def create_record(request: AdmissionRequest, decision: AdmissionDecision) -> AuditRecord:
    """
    Create the audit record for a decided request.

    Args:
        request: The admission request
        decision: The decision made for it

    Returns:
        AuditRecord
    """
    auth_pubkey = None
    if request.authenticated_identity is not None:
        auth_pubkey = key_to_hex(request.authenticated_identity)

    event_pubkey = None
    event_id = None
    kind = None
    if request.event is not None:
        event_pubkey = key_to_hex(request.event.author_key)
        if request.event.event_id is not None:
            event_id = key_to_hex(request.event.event_id)
        kind = request.event.kind

    return AuditRecord(
        decision=decision.decision,
        reason=decision.reason,
        auth_pubkey=auth_pubkey,
        event_pubkey=event_pubkey,
        event_id=event_id,
        kind=kind,
    )
