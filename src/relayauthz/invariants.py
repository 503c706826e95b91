"""
Runtime invariant validation.
These checks guard the shape of keys and decisions at construction time.
"""

from typing import Optional

from .errors import InvariantViolationError, InvalidKeyError
from .config import (
    PUBLIC_KEY_LENGTH,
    VALID_DECISIONS,
    VALID_REASONS,
    DECISION_PERMIT,
    DECISION_DENY,
)


def validate_canonical_key(key: bytes):
    """
    Validate that a value is a canonical 32-byte key.

    Args:
        key: Candidate key

    Raises:
        InvalidKeyError: If key is not bytes of the right length
    """
    if not isinstance(key, bytes):
        raise InvalidKeyError(f"Key must be bytes, got {type(key).__name__}")

    if len(key) != PUBLIC_KEY_LENGTH:
        raise InvalidKeyError(
            f"Key must be {PUBLIC_KEY_LENGTH} bytes, got {len(key)}"
        )


def validate_decision(decision: str):
    """
    Validate that decision is one of the allowed values.

    Args:
        decision: Decision string

    Raises:
        InvariantViolationError: If decision is invalid
    """
    if decision not in VALID_DECISIONS:
        raise InvariantViolationError(f"Invalid decision: {decision}")


def validate_reason(reason: str):
    """
    Validate that a reason code is one of the known values.

    Raises:
        InvariantViolationError: If reason is unknown
    """
    if reason not in VALID_REASONS:
        raise InvariantViolationError(f"Invalid reason: {reason}")


def validate_decision_message(decision: str, message: Optional[str]):
    """
    Validate that PERMIT carries no message and DENY carries one.

    Args:
        decision: Decision string
        message: Client-facing message

    Raises:
        InvariantViolationError: If the message does not fit the decision
    """
    if decision == DECISION_PERMIT and message is not None:
        raise InvariantViolationError("PERMIT decision must not carry a message")

    if decision == DECISION_DENY and not message:
        raise InvariantViolationError("DENY decision must carry a message")


def validate_event_kind(kind: int):
    """
    Validate an event kind tag.

    Raises:
        InvariantViolationError: If kind is not a non-negative integer
    """
    # bool is an int subclass but never a meaningful kind
    if not isinstance(kind, int) or isinstance(kind, bool):
        raise InvariantViolationError(f"Event kind must be an integer, got {type(kind).__name__}")

    if kind < 0:
        raise InvariantViolationError(f"Event kind must be non-negative, got {kind}")


def check_decision_invariants(decision: str, reason: str, message: Optional[str]):
    """
    Check all invariants for an admission decision.

    Raises:
        InvariantViolationError: If any invariant is violated
    """
    validate_decision(decision)
    validate_reason(reason)
    validate_decision_message(decision, message)
