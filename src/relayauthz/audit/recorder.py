"""
Audit recorder for admission decisions.
Records are emitted as canonical JSON lines on the audit logger.
Delivery is best-effort: a failing sink never affects a decision, and
records a sink could not write are counted.
"""

import logging
import threading
from typing import Optional

from ..config import AUDIT_LOGGER_NAME
from ..policy.model import AdmissionRequest, AdmissionDecision
from ..utils.canonical_json import canonicalize
from .log_schema import AuditRecord, create_record


class AuditRecorder:
    """
    Emits one audit record per admission decision.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        """
        Initialize audit recorder.

        Args:
            logger: Destination logger (defaults to the relayauthz.audit logger)
            level: Level records are emitted at
        """
        self.logger = logger or logging.getLogger(AUDIT_LOGGER_NAME)
        self.level = level
        self._dropped = 0
        self._lock = threading.Lock()

    @property
    def dropped(self) -> int:
        """
        Number of records that could not be delivered.

        Counts records whose formatting or emission raised, and records a
        JsonLineHandler failed to write (reported through on_drop, possibly
        from its writer thread).
        """
        with self._lock:
            return self._dropped

    def record_decision(
        self,
        request: AdmissionRequest,
        decision: AdmissionDecision,
    ) -> Optional[AuditRecord]:
        """
        Record an admission decision.

        Args:
            request: The admission request
            decision: The decision made for it

        Returns:
            The emitted AuditRecord, or None if delivery failed
        """
        try:
            record = create_record(request, decision)
            if self.logger.isEnabledFor(self.level):
                payload = record.to_dict()
                self.logger.log(
                    self.level,
                    canonicalize(payload),
                    extra={'audit': payload, 'on_drop': self._count_drop},
                )
            return record
        except Exception:
            # Sink failures are counted, never propagated into the decision path
            self._count_drop()
            return None

    def _count_drop(self):
        with self._lock:
            self._dropped += 1
