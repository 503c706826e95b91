"""
relay-authz - NIP-42 allowlist authorization for Nostr relays

Decodes configured npub identities into an immutable allowlist and decides,
per submitted event, whether the NIP-42 authenticated pubkey may publish.

Main exports:
- AdmissionEngine: Main engine class
- Allowlist: Immutable set of permitted keys
- AdmissionRequest / AdmissionDecision: Per-call input and output
- decode / decode_all: NIP-19 identity decoding
"""

from .engine import AdmissionEngine
from .identity import decode, decode_all, decode_entity, encode_public_key
from .policy import Allowlist, AdmissionRequest, AdmissionDecision, EventDescriptor
from .settings import Settings, load_settings
from .errors import *
from .config import DECISION_PERMIT, DECISION_DENY

__version__ = "0.1.0"

__all__ = [
    'AdmissionEngine',
    'Allowlist',
    'AdmissionRequest',
    'AdmissionDecision',
    'EventDescriptor',
    'Settings',
    'load_settings',
    'decode',
    'decode_all',
    'decode_entity',
    'encode_public_key',
    'DECISION_PERMIT',
    'DECISION_DENY',
]
