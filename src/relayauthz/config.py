"""
Configuration constants for relay-authz.
These are immutable system constants, not runtime configuration.
Runtime settings are loaded by relayauthz.settings.
"""

# Key constants
PUBLIC_KEY_LENGTH = 32  # BIP-340 x-only secp256k1 public key bytes
PUBLIC_KEY_HEX_LENGTH = PUBLIC_KEY_LENGTH * 2

# NIP-19 entity kinds (bech32 human-readable parts)
KIND_PUBLIC_KEY = "npub"
KIND_SECRET_KEY = "nsec"
KIND_NOTE = "note"
KIND_PROFILE = "nprofile"
KIND_EVENT = "nevent"
KIND_ADDRESS = "naddr"
KIND_RELAY = "nrelay"
FIXED_WIDTH_KINDS = frozenset([KIND_PUBLIC_KEY, KIND_SECRET_KEY, KIND_NOTE])

# Bech32 encoding
BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
BECH32_SEPARATOR = "1"
BECH32_CHECKSUM_LENGTH = 6
BECH32_CONST = 1
MAX_ENCODED_LENGTH = 5000  # NIP-19 TLV entities are not bound to BIP-173's 90

# Admission decisions
DECISION_PERMIT = "PERMIT"
DECISION_DENY = "DENY"
VALID_DECISIONS = frozenset([DECISION_PERMIT, DECISION_DENY])

# Decision reason codes (stable, used in audit records)
REASON_AUTH_REQUIRED = "auth-required"
REASON_NO_EVENT = "no-event"
REASON_NOT_ALLOWLISTED = "not-allowlisted"
REASON_ALLOWLISTED = "allowlisted"
VALID_REASONS = frozenset([
    REASON_AUTH_REQUIRED,
    REASON_NO_EVENT,
    REASON_NOT_ALLOWLISTED,
    REASON_ALLOWLISTED,
])

# Client-facing messages (NIP-01 machine-readable prefixes)
MESSAGE_AUTH_REQUIRED = "auth-required: NIP-42 authentication required"
MESSAGE_NO_EVENT = "blocked: no event provided"
MESSAGE_NOT_AUTHORIZED = "restricted: your pubkey is not authorized to publish"

# Audit
ROOT_LOGGER_NAME = "relayauthz"
AUDIT_LOGGER_NAME = "relayauthz.audit"
AUDIT_EVENT_ADMISSION = "admission"

# Canonical JSON settings
JSON_SEPARATORS = (',', ':')  # No whitespace
JSON_SORT_KEYS = True
JSON_ENSURE_ASCII = False

# Runtime setting defaults
DEFAULT_CONFIG_FILE = "policy-config.toml"
DEFAULT_LOG_LEVEL = "ERROR"
DEFAULT_LISTEN_ADDRESS = "[::1]:50051"
DEFAULT_MAX_WORKERS = 10
DEFAULT_GRACE_PERIOD = 5.0  # seconds

# Logging
LOG_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# gRPC service
RPC_PACKAGE = "nauthz"
RPC_SERVICE = "nauthz.Authorization"
RPC_METHOD_EVENT_ADMIT = "EventAdmit"
