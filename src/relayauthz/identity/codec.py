"""
NIP-19 identity codec.

Decodes human-readable bech32 entities (npub, nsec, note, ...) into their
binary payloads, and accepts only public identities as canonical keys.
Decoding is pure and deterministic; every failure is a DecodeError.
"""

from typing import List, Sequence, Tuple

from ..config import KIND_PUBLIC_KEY, FIXED_WIDTH_KINDS, PUBLIC_KEY_LENGTH
from ..errors import DecodeError, MalformedEncodingError, UnexpectedKindError, InvalidKeyError
from .bech32 import bech32_decode, bech32_encode, convertbits


def decode_entity(encoded: str) -> Tuple[str, bytes]:
    """
    Decode any NIP-19 entity without checking its kind.

    Phase 1 validates the bech32 structure and checksum. Phase 2 repacks
    the 5-bit groups into bytes and checks the payload width of
    fixed-width kinds.

    Args:
        encoded: bech32 string

    Returns:
        Tuple of (kind, payload bytes)

    Raises:
        MalformedEncodingError: If structure, checksum or payload is invalid
    """
    kind, data = bech32_decode(encoded)

    try:
        payload = bytes(convertbits(data, 5, 8, pad=False))
    except MalformedEncodingError as e:
        raise MalformedEncodingError(e.message, encoded=encoded) from None

    if kind in FIXED_WIDTH_KINDS and len(payload) != PUBLIC_KEY_LENGTH:
        raise MalformedEncodingError(
            f"{kind} payload must be {PUBLIC_KEY_LENGTH} bytes, got {len(payload)}",
            encoded=encoded,
        )

    return kind, payload


def decode(encoded: str) -> Tuple[str, bytes]:
    """
    Decode a public identity (npub) into its canonical key.

    Args:
        encoded: bech32 npub string

    Returns:
        Tuple of ("npub", 32-byte key)

    Raises:
        MalformedEncodingError: If the string is not a valid encoding
        UnexpectedKindError: If the string is valid but not an npub
    """
    kind, payload = decode_entity(encoded)

    if kind != KIND_PUBLIC_KEY:
        raise UnexpectedKindError(
            f"Expected {KIND_PUBLIC_KEY} prefix, got {kind}",
            kind=kind,
            encoded=encoded,
        )

    return kind, payload


def decode_all(encodings: Sequence[str]) -> List[bytes]:
    """
    Decode a batch of public identities.

    Fails atomically: the first invalid entry aborts the whole batch.

    Args:
        encodings: npub strings

    Returns:
        Canonical keys in input order

    Raises:
        DecodeError: Subclass of the first failure, with index set
    """
    keys = []
    for index, encoded in enumerate(encodings):
        try:
            _, key = decode(encoded)
        except DecodeError as e:
            raise e.at_position(index) from e
        keys.append(key)
    return keys


def encode(kind: str, payload: bytes) -> str:
    """
    Encode a payload as a NIP-19 entity.

    Args:
        kind: Entity kind (bech32 hrp)
        payload: Raw payload bytes

    Returns:
        bech32 string
    """
    return bech32_encode(kind, convertbits(payload, 8, 5, pad=True))


def encode_public_key(key: bytes) -> str:
    """
    Encode a canonical key as an npub.

    Args:
        key: 32-byte public key

    Returns:
        npub string

    Raises:
        InvalidKeyError: If key is not 32 bytes
    """
    if len(key) != PUBLIC_KEY_LENGTH:
        raise InvalidKeyError(f"Key must be {PUBLIC_KEY_LENGTH} bytes, got {len(key)}")
    return encode(KIND_PUBLIC_KEY, bytes(key))
