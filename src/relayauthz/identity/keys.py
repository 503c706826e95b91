"""
Canonical key helpers.
Keys are BIP-340 x-only secp256k1 public keys held as 32 raw bytes.
"""

from cryptography.hazmat.primitives.asymmetric import ec

from ..config import PUBLIC_KEY_HEX_LENGTH
from ..errors import InvalidKeyError
from ..invariants import validate_canonical_key

# x-only keys lift to the point with even y
_EVEN_Y_PREFIX = b"\x02"


def key_to_hex(key: bytes) -> str:
    """Render a key as lowercase hex."""
    return bytes(key).hex()


def key_from_hex(key_hex: str) -> bytes:
    """
    Parse a 64-character hex string into a canonical key.

    Args:
        key_hex: Hex-encoded key (either case)

    Returns:
        32-byte key

    Raises:
        InvalidKeyError: If the string is not 64 hex characters
    """
    if not isinstance(key_hex, str) or len(key_hex) != PUBLIC_KEY_HEX_LENGTH:
        raise InvalidKeyError(f"Key must be {PUBLIC_KEY_HEX_LENGTH} hex characters")

    try:
        key = bytes.fromhex(key_hex)
    except ValueError as e:
        raise InvalidKeyError(f"Key is not valid hexadecimal: {e}")

    # fromhex skips whitespace
    validate_canonical_key(key)
    return key


def is_valid_point(key: bytes) -> bool:
    """
    Check whether a key is the x-coordinate of a secp256k1 point.

    Args:
        key: 32-byte key

    Returns:
        True if the key lifts to a curve point

    Raises:
        InvalidKeyError: If key is not 32 bytes
    """
    validate_canonical_key(key)

    try:
        ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), _EVEN_Y_PREFIX + key)
    except ValueError:
        return False
    return True


def validate_point(key: bytes):
    """
    Require that a key is a secp256k1 x-only public key.

    Raises:
        InvalidKeyError: If key is malformed or not on the curve
    """
    if not is_valid_point(key):
        raise InvalidKeyError(f"Key {key_to_hex(key)} is not a valid secp256k1 x-only public key")
