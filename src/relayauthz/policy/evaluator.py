"""
Deterministic admission evaluation.
Evaluation is pure and side-effect free; auditing happens in the engine.
"""

from ..config import (
    REASON_AUTH_REQUIRED,
    REASON_NO_EVENT,
    REASON_NOT_ALLOWLISTED,
    REASON_ALLOWLISTED,
    MESSAGE_AUTH_REQUIRED,
    MESSAGE_NO_EVENT,
    MESSAGE_NOT_AUTHORIZED,
)
from .allowlist import Allowlist
from .model import AdmissionRequest, AdmissionDecision

_DENY_AUTH_REQUIRED = AdmissionDecision.deny(REASON_AUTH_REQUIRED, MESSAGE_AUTH_REQUIRED)
_DENY_NO_EVENT = AdmissionDecision.deny(REASON_NO_EVENT, MESSAGE_NO_EVENT)
_DENY_NOT_ALLOWLISTED = AdmissionDecision.deny(REASON_NOT_ALLOWLISTED, MESSAGE_NOT_AUTHORIZED)
_PERMIT_ALLOWLISTED = AdmissionDecision.permit(REASON_ALLOWLISTED)


def evaluate(allowlist: Allowlist, request: AdmissionRequest) -> AdmissionDecision:
    """
    Evaluate an admission request against an allowlist.

    Evaluation order, first match wins:
    1. No authenticated identity (absent or empty) = DENY auth-required
    2. No event = DENY no-event
    3. Identity not allowlisted = DENY not-allowlisted
    4. Otherwise PERMIT

    The event's author key is never consulted: an allowlisted identity may
    admit events authored by any key.

    Args:
        allowlist: Keys permitted to publish
        request: Admission request

    Returns:
        AdmissionDecision
    """
    if not request.is_authenticated:
        return _DENY_AUTH_REQUIRED

    if not request.has_event:
        return _DENY_NO_EVENT

    if request.authenticated_identity not in allowlist:
        return _DENY_NOT_ALLOWLISTED

    return _PERMIT_ALLOWLISTED
