"""
relay-authz Public API - NIP-42 allowlist admission engine

This is the main entry point for admission decisions.
All decisions flow through this engine and are audited.
"""

import logging
from typing import Iterable, Optional, Union

from .audit import AuditRecorder
from .policy import Allowlist, AdmissionRequest, AdmissionDecision, EventDescriptor, evaluate
from .settings import Settings

logger = logging.getLogger(__name__)


class AdmissionEngine:
    """
    Decides whether events may be admitted to the relay.

    The engine owns an immutable allowlist fixed at construction. decide()
    is total and thread-safe: it never raises for a well-typed request and
    never mutates shared state.
    """

    def __init__(self, allowlist: Allowlist, recorder: Optional[AuditRecorder] = None):
        """
        Initialize admission engine.

        Args:
            allowlist: Keys permitted to publish
            recorder: Audit recorder (defaults to the relayauthz.audit logger)
        """
        self._allowlist = allowlist
        self.audit_recorder = recorder or AuditRecorder()

    @classmethod
    def build(
        cls,
        allowlist: Union[Allowlist, Iterable[bytes]],
        recorder: Optional[AuditRecorder] = None,
    ) -> 'AdmissionEngine':
        """
        Build an engine from already-decoded keys.

        Args:
            allowlist: Allowlist or iterable of 32-byte keys
            recorder: Optional audit recorder

        Returns:
            AdmissionEngine instance

        Raises:
            InvalidKeyError: If any key is not 32 bytes
        """
        if not isinstance(allowlist, Allowlist):
            allowlist = Allowlist(allowlist)
        return cls(allowlist, recorder)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        recorder: Optional[AuditRecorder] = None,
    ) -> 'AdmissionEngine':
        """
        Build an engine from runtime settings.

        Raises:
            DecodeError: If a configured npub is invalid
            InvalidKeyError: If point validation is enabled and fails
        """
        allowlist = Allowlist.from_encodings(
            settings.allowed_npubs,
            verify_curve_points=settings.verify_curve_points,
        )
        if not len(allowlist):
            logger.warning("Allowlist is empty; every event will be denied")
        return cls(allowlist, recorder)

    @property
    def allowlist(self) -> Allowlist:
        return self._allowlist

    def decide(self, request: AdmissionRequest) -> AdmissionDecision:
        """
        Decide an admission request.

        This is the core authorization function. It:
        1. Evaluates the request against the allowlist (pure)
        2. Records the decision in the audit log (best-effort)
        3. Returns the decision

        Args:
            request: Admission request

        Returns:
            AdmissionDecision, PERMIT or DENY
        """
        decision = evaluate(self._allowlist, request)
        self.audit_recorder.record_decision(request, decision)
        return decision

    def admit(
        self,
        authenticated_identity: Optional[bytes],
        author_key: Optional[bytes] = None,
        kind: int = 0,
        event_id: Optional[bytes] = None,
    ) -> AdmissionDecision:
        """
        Decide from plain values.

        Args:
            authenticated_identity: AUTH'd pubkey bytes or None
            author_key: Event author key, or None when no event was supplied
            kind: Event kind
            event_id: Optional event id

        Returns:
            AdmissionDecision
        """
        event = None
        if author_key is not None:
            event = EventDescriptor(author_key=author_key, kind=kind, event_id=event_id)
        return self.decide(AdmissionRequest(authenticated_identity=authenticated_identity, event=event))
