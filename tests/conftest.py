"""
Shared fixtures and known key vectors.
"""

import pytest

from relayauthz import AdmissionEngine, Allowlist
from relayauthz.audit import AuditRecorder

# NIP-19 vectors
NPUB_A = "npub1mkq63wkt4v94cvq869njlwpszwpmf62c84p3sdvc2ptjy04jnzjs20r4tx"
HEX_A = "dd81a8bacbab0b5c3007d1672fb8301383b4e9583d431835985057223eb298a5"
NPUB_B = "npub180cvv07tjdrrgpa0j7j7tmnyl2yr6yr7l8j4s3evf6u64th6gkwsyjh6w6"
HEX_B = "3bf0c63fcb93463407af97a5e5ee64fa883d107ef9e558472c4eb9aaaefa459d"
NSEC = "nsec1vl029mgpspedva04g90vltkh6fvh240zqtv9k0t9af8935ke9laqsnlfe5"
NSEC_HEX = "67dea2ed018072d675f5415ecfaed7d2597555e202d85b3d65ea4e58d2d92ffa"

KEY_A = bytes.fromhex(HEX_A)
KEY_B = bytes.fromhex(HEX_B)
KEY_C = bytes.fromhex("00" * 31 + "01")

# BIP-340 test vector: x-coordinate with no point on secp256k1
OFF_CURVE_HEX = "eefdea4cdb677750a420fee807eacf21eb9898ae79b9768766e4faa04a2d4a34"


@pytest.fixture
def allowlist():
    return Allowlist([KEY_A])


@pytest.fixture
def recorder():
    return AuditRecorder()


@pytest.fixture
def engine(allowlist, recorder):
    return AdmissionEngine(allowlist, recorder)
