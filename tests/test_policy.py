"""
Tests for admission policy evaluation.
"""

import pytest

from relayauthz import AdmissionEngine, AdmissionRequest, EventDescriptor, Allowlist
from relayauthz.config import (
    DECISION_PERMIT,
    DECISION_DENY,
    REASON_AUTH_REQUIRED,
    REASON_NO_EVENT,
    REASON_NOT_ALLOWLISTED,
    REASON_ALLOWLISTED,
)
from relayauthz.errors import InvalidKeyError
from relayauthz.policy import evaluate

from conftest import KEY_A, KEY_B, KEY_C, NPUB_A


def _request(identity, author=KEY_C, kind=1, with_event=True):
    event = EventDescriptor(author_key=author, kind=kind) if with_event else None
    return AdmissionRequest(authenticated_identity=identity, event=event)


class TestAuthenticationRequired:
    """Test that unauthenticated submissions are denied."""

    def test_absent_identity_denied(self, engine):
        """Test a request without AUTH is denied as auth-required."""
        decision = engine.decide(_request(None))

        assert decision.decision == DECISION_DENY
        assert decision.reason == REASON_AUTH_REQUIRED
        assert "authentication required" in decision.message

    def test_empty_identity_denied(self, engine):
        """Test empty identity bytes behave exactly like an absent identity."""
        absent = engine.decide(_request(None))
        empty = engine.decide(_request(b""))

        assert empty == absent

    def test_auth_checked_before_event(self, engine):
        """Test auth-required wins over a missing event."""
        decision = engine.decide(_request(None, with_event=False))
        assert decision.reason == REASON_AUTH_REQUIRED

    def test_auth_message_differs_from_not_authorized(self, engine):
        """Test clients can tell re-authentication from a block."""
        unauthenticated = engine.decide(_request(None))
        blocked = engine.decide(_request(KEY_B))

        assert unauthenticated.message != blocked.message


class TestEventRequired:
    """Test that a missing event is denied."""

    def test_missing_event_denied(self, engine):
        """Test an allowlisted identity without an event is denied."""
        decision = engine.decide(_request(KEY_A, with_event=False))

        assert decision.decision == DECISION_DENY
        assert decision.reason == REASON_NO_EVENT
        assert "no event" in decision.message


class TestAllowlistMembership:
    """Test allowlist exact-match membership."""

    def test_allowlisted_identity_permitted(self, engine):
        """Test an allowlisted identity is permitted without a message."""
        decision = engine.decide(_request(KEY_A))

        assert decision.decision == DECISION_PERMIT
        assert decision.reason == REASON_ALLOWLISTED
        assert decision.message is None
        assert decision.permitted

    def test_unknown_identity_denied(self, engine):
        """Test an identity outside the allowlist is denied."""
        decision = engine.decide(_request(KEY_B, author=KEY_A))

        assert decision.decision == DECISION_DENY
        assert decision.reason == REASON_NOT_ALLOWLISTED
        assert "not authorized" in decision.message

    def test_identity_not_in_message(self, engine):
        """Test the offending key stays out of the client message."""
        decision = engine.decide(_request(KEY_B))
        assert KEY_B.hex() not in decision.message

    @pytest.mark.parametrize("index", [0, 15, 31])
    def test_single_byte_difference_denied(self, engine, index):
        """Test a key differing in one byte is not a member."""
        altered = bytearray(KEY_A)
        altered[index] ^= 0x01

        decision = engine.decide(_request(bytes(altered)))
        assert decision.reason == REASON_NOT_ALLOWLISTED

    def test_truncated_identity_denied(self, engine):
        """Test a prefix of an allowlisted key is not a member."""
        decision = engine.decide(_request(KEY_A[:31]))
        assert decision.reason == REASON_NOT_ALLOWLISTED

    def test_bytearray_identity_matches(self, engine):
        """Test membership compares bytes, not object types."""
        decision = engine.decide(_request(bytearray(KEY_A)))
        assert decision.decision == DECISION_PERMIT

    def test_empty_allowlist_denies_everyone(self, recorder):
        """Test an empty allowlist denies every authenticated identity."""
        engine = AdmissionEngine.build([], recorder)

        assert engine.decide(_request(KEY_A)).reason == REASON_NOT_ALLOWLISTED


class TestEventAuthorIndependence:
    """Test that the event's claimed author never affects the decision."""

    @pytest.mark.parametrize("author", [KEY_A, KEY_B, KEY_C, b""])
    def test_allowlisted_identity_permits_any_author(self, engine, author):
        """Test author equal to, different from, and outside the allowlist."""
        decision = engine.decide(_request(KEY_A, author=author))
        assert decision.decision == DECISION_PERMIT

    def test_allowlisted_author_does_not_help(self, engine):
        """Test an allowlisted author cannot carry an unknown identity."""
        decision = engine.decide(_request(KEY_B, author=KEY_A))
        assert decision.decision == DECISION_DENY

    @pytest.mark.parametrize("kind", [0, 1, 3, 30023, 2 ** 32])
    def test_kind_does_not_matter(self, engine, kind):
        """Test every event kind is treated alike."""
        assert engine.decide(_request(KEY_A, kind=kind)).decision == DECISION_PERMIT


class TestScenarios:
    """End-to-end scenarios from configuration to decision."""

    def test_reference_scenarios(self, recorder):
        """Test the reference allowlist behaves as documented."""
        engine = AdmissionEngine(Allowlist.from_encodings([NPUB_A]), recorder)

        assert engine.decide(_request(None)).decision == DECISION_DENY
        assert engine.decide(_request(KEY_A, with_event=False)).decision == DECISION_DENY

        permit = engine.decide(_request(KEY_A, author=KEY_B))
        assert permit.decision == DECISION_PERMIT
        assert permit.message is None

        deny = engine.decide(_request(KEY_B, author=KEY_A))
        assert deny.decision == DECISION_DENY
        assert deny.message

    def test_admit_helper(self, engine):
        """Test deciding from plain values."""
        assert engine.admit(KEY_A, author_key=KEY_C, kind=1).decision == DECISION_PERMIT
        assert engine.admit(KEY_A).reason == REASON_NO_EVENT
        assert engine.admit(None, author_key=KEY_C).reason == REASON_AUTH_REQUIRED


class TestEngineConstruction:
    """Test building engines."""

    def test_build_from_keys(self, recorder):
        """Test the engine accepts already-decoded keys."""
        engine = AdmissionEngine.build({KEY_A, KEY_B}, recorder)

        assert len(engine.allowlist) == 2
        assert engine.decide(_request(KEY_B)).decision == DECISION_PERMIT

    def test_build_rejects_wrong_width_keys(self):
        """Test non-canonical keys cannot enter the allowlist."""
        with pytest.raises(InvalidKeyError):
            AdmissionEngine.build([KEY_A, b"short"])

    def test_build_rejects_encoded_strings(self):
        """Test the engine never parses encodings itself."""
        with pytest.raises(InvalidKeyError):
            AdmissionEngine.build([NPUB_A])

    def test_evaluate_is_pure(self, allowlist):
        """Test the decision function works without any engine or sink."""
        decision = evaluate(allowlist, _request(KEY_A))
        assert decision.decision == DECISION_PERMIT
