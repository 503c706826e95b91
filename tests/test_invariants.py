"""
Tests for invariant validation.
These tests attempt to construct values that break core invariants.
"""

import pytest

from relayauthz import AdmissionDecision, EventDescriptor, Allowlist
from relayauthz.config import DECISION_PERMIT, DECISION_DENY, REASON_ALLOWLISTED, REASON_NO_EVENT
from relayauthz.errors import InvariantViolationError, InvalidKeyError
from relayauthz.invariants import *

from conftest import KEY_A


class TestDecisionShape:
    """Test that decisions carry messages only when denying."""

    def test_permit_without_message(self):
        """Test a plain permit is valid."""
        decision = AdmissionDecision.permit(REASON_ALLOWLISTED)
        assert decision.message is None

    def test_permit_with_message_rejected(self):
        """Test a permit cannot carry a message."""
        with pytest.raises(InvariantViolationError):
            AdmissionDecision(DECISION_PERMIT, REASON_ALLOWLISTED, message="welcome")

    def test_deny_without_message_rejected(self):
        """Test a deny must explain itself."""
        with pytest.raises(InvariantViolationError):
            AdmissionDecision(DECISION_DENY, REASON_NO_EVENT)

        with pytest.raises(InvariantViolationError):
            AdmissionDecision(DECISION_DENY, REASON_NO_EVENT, message="")

    def test_unknown_decision_rejected(self):
        """Test only PERMIT and DENY exist."""
        with pytest.raises(InvariantViolationError):
            validate_decision("ALLOW")

    def test_unknown_reason_rejected(self):
        """Test reason codes are a closed set."""
        with pytest.raises(InvariantViolationError):
            AdmissionDecision.deny("because", "blocked: because")

    def test_check_all(self):
        """Test the combined check accepts valid shapes."""
        check_decision_invariants(DECISION_PERMIT, REASON_ALLOWLISTED, None)
        check_decision_invariants(DECISION_DENY, REASON_NO_EVENT, "blocked: no event provided")


class TestEventKind:
    """Test event kind validation."""

    @pytest.mark.parametrize("kind", [-1, True, "1", 1.0, None])
    def test_invalid_kinds_rejected(self, kind):
        """Test kinds must be non-negative integers."""
        with pytest.raises(InvariantViolationError):
            EventDescriptor(author_key=KEY_A, kind=kind)

    def test_zero_kind_accepted(self):
        """Test kind 0 (metadata) is valid."""
        assert EventDescriptor(author_key=KEY_A, kind=0).kind == 0


class TestCanonicalKey:
    """Test canonical key validation."""

    @pytest.mark.parametrize("key", [b"", b"\x00" * 31, b"\x00" * 33, KEY_A.hex(), None])
    def test_non_canonical_keys_rejected(self, key):
        """Test only 32 raw bytes are canonical keys."""
        with pytest.raises(InvalidKeyError):
            validate_canonical_key(key)

    def test_allowlist_rejects_non_canonical_keys(self):
        """Test the allowlist refuses anything but canonical keys."""
        with pytest.raises(InvalidKeyError):
            Allowlist([KEY_A, KEY_A[:16]])


class TestAllowlistImmutability:
    """Test the allowlist cannot be changed after construction."""

    def test_no_mutation_api(self):
        """Test there is no way to add members."""
        allowlist = Allowlist([KEY_A])

        assert not hasattr(allowlist, 'add')
        with pytest.raises(AttributeError):
            allowlist.extra = 1

    def test_source_changes_do_not_leak(self):
        """Test mutating the source collection does not change membership."""
        source = [KEY_A]
        allowlist = Allowlist(source)
        source.append(b"\x01" * 32)

        assert len(allowlist) == 1
        assert b"\x01" * 32 not in allowlist

    def test_non_bytes_never_members(self):
        """Test membership of hex strings or other types is always false."""
        allowlist = Allowlist([KEY_A])

        assert KEY_A.hex() not in allowlist
        assert None not in allowlist
        assert list(allowlist) == [KEY_A]
