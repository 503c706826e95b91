"""
Admission request and decision model.
Requests and decisions are immutable per-call values.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from ..config import DECISION_PERMIT, DECISION_DENY
from ..invariants import check_decision_invariants, validate_event_kind


@dataclass(frozen=True)
class EventDescriptor:
    """
    The parts of a submitted event the admission policy can see.

    author_key is the event's claimed author and is independent of the
    authenticated identity. event_id is carried for audit correlation only.
    """
    author_key: bytes
    kind: int
    event_id: Optional[bytes] = None

    def __post_init__(self):
        validate_event_kind(self.kind)


@dataclass(frozen=True)
class AdmissionRequest:
    """
    An event submission with the identity that authenticated it.

    authenticated_identity is None when the client never authenticated.
    Present-but-empty bytes are kept as given so the boundary stays
    faithful, but count as unauthenticated.
    """
    authenticated_identity: Optional[bytes] = None
    event: Optional[EventDescriptor] = None

    @property
    def is_authenticated(self) -> bool:
        """True only for a present, non-empty identity."""
        return self.authenticated_identity is not None and len(self.authenticated_identity) > 0

    @property
    def has_event(self) -> bool:
        return self.event is not None


@dataclass(frozen=True)
class AdmissionDecision:
    """
    Outcome of an admission check.

    PERMIT carries no message; DENY always carries one. reason is a stable
    machine-readable code for audit records.
    """
    decision: str
    reason: str
    message: Optional[str] = None

    def __post_init__(self):
        check_decision_invariants(self.decision, self.reason, self.message)

    @classmethod
    def permit(cls, reason: str) -> 'AdmissionDecision':
        return cls(decision=DECISION_PERMIT, reason=reason)

    @classmethod
    def deny(cls, reason: str, message: str) -> 'AdmissionDecision':
        return cls(decision=DECISION_DENY, reason=reason, message=message)

    @property
    def permitted(self) -> bool:
        return self.decision == DECISION_PERMIT

    def to_dict(self) -> Dict[str, Any]:
        """Convert decision to dictionary."""
        return {
            'decision': self.decision,
            'reason': self.reason,
            'message': self.message,
        }
