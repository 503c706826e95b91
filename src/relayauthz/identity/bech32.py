"""
Bech32 checksum and bit-packing primitives (BIP-173).
All functions are pure and raise MalformedEncodingError on bad input.
"""

from typing import List, Sequence, Tuple

from ..config import (
    BECH32_CHARSET,
    BECH32_SEPARATOR,
    BECH32_CHECKSUM_LENGTH,
    BECH32_CONST,
    MAX_ENCODED_LENGTH,
)
from ..errors import MalformedEncodingError

_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_CHARSET_REVERSE = {char: value for value, char in enumerate(BECH32_CHARSET)}


def bech32_polymod(values: Sequence[int]) -> int:
    """Compute the BCH checksum polynomial over 5-bit values."""
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ value
        for i, gen in enumerate(_GENERATOR):
            if (top >> i) & 1:
                chk ^= gen
    return chk


def bech32_hrp_expand(hrp: str) -> List[int]:
    """Expand the human-readable part for checksum computation."""
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def bech32_verify_checksum(hrp: str, data: Sequence[int]) -> bool:
    """
    Verify a checksum given the human-readable part and data symbols.

    Args:
        hrp: Lowercase human-readable part
        data: 5-bit symbols including the trailing checksum

    Returns:
        True if checksum is valid
    """
    return bech32_polymod(bech32_hrp_expand(hrp) + list(data)) == BECH32_CONST


def bech32_create_checksum(hrp: str, data: Sequence[int]) -> List[int]:
    """Compute the six checksum symbols for hrp and data."""
    values = bech32_hrp_expand(hrp) + list(data)
    polymod = bech32_polymod(values + [0] * BECH32_CHECKSUM_LENGTH) ^ BECH32_CONST
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(BECH32_CHECKSUM_LENGTH)]


def bech32_encode(hrp: str, data: Sequence[int]) -> str:
    """
    Build a bech32 string from hrp and 5-bit data symbols.

    Args:
        hrp: Human-readable part
        data: 5-bit symbols (without checksum)

    Returns:
        Lowercase bech32 string
    """
    hrp = hrp.lower()
    combined = list(data) + bech32_create_checksum(hrp, data)
    return hrp + BECH32_SEPARATOR + ''.join(BECH32_CHARSET[d] for d in combined)


def bech32_decode(encoded: str) -> Tuple[str, List[int]]:
    """
    Validate a bech32 string and split it into hrp and data symbols.

    Checks, in order: type, length, printable ASCII, case consistency,
    separator placement, alphabet membership, checksum.

    Args:
        encoded: Candidate bech32 string

    Returns:
        Tuple of (lowercase hrp, 5-bit data symbols without checksum)

    Raises:
        MalformedEncodingError: If any check fails
    """
    if not isinstance(encoded, str):
        raise MalformedEncodingError(
            f"Expected str, got {type(encoded).__name__}", encoded=encoded
        )

    if len(encoded) > MAX_ENCODED_LENGTH:
        raise MalformedEncodingError(
            f"Encoding too long: {len(encoded)} characters", encoded=encoded
        )

    if any(ord(c) < 33 or ord(c) > 126 for c in encoded):
        raise MalformedEncodingError("Encoding contains invalid characters", encoded=encoded)

    if encoded.lower() != encoded and encoded.upper() != encoded:
        raise MalformedEncodingError("Encoding mixes upper and lower case", encoded=encoded)

    encoded = encoded.lower()
    pos = encoded.rfind(BECH32_SEPARATOR)

    if pos < 1:
        raise MalformedEncodingError("Missing separator or empty prefix", encoded=encoded)

    if pos + 1 + BECH32_CHECKSUM_LENGTH > len(encoded):
        raise MalformedEncodingError("Encoding too short for checksum", encoded=encoded)

    hrp = encoded[:pos]
    try:
        data = [_CHARSET_REVERSE[c] for c in encoded[pos + 1:]]
    except KeyError as e:
        raise MalformedEncodingError(
            f"Invalid data character {e.args[0]!r}", encoded=encoded
        ) from None

    if not bech32_verify_checksum(hrp, data):
        raise MalformedEncodingError("Invalid checksum", encoded=encoded)

    return hrp, data[:-BECH32_CHECKSUM_LENGTH]


def convertbits(data: Sequence[int], frombits: int, tobits: int, pad: bool = True) -> List[int]:
    """
    Regroup a sequence of frombits-wide values into tobits-wide values.

    Args:
        data: Input values
        frombits: Width of input values
        tobits: Width of output values
        pad: Pad the final group with zero bits (encoding direction)

    Returns:
        Regrouped values

    Raises:
        MalformedEncodingError: If a value is out of range, or padding is
            invalid when pad is False
    """
    acc = 0
    bits = 0
    ret = []
    maxv = (1 << tobits) - 1
    max_acc = (1 << (frombits + tobits - 1)) - 1

    for value in data:
        if value < 0 or (value >> frombits):
            raise MalformedEncodingError(f"Value {value} does not fit in {frombits} bits")
        acc = ((acc << frombits) | value) & max_acc
        bits += frombits
        while bits >= tobits:
            bits -= tobits
            ret.append((acc >> bits) & maxv)

    if pad:
        if bits:
            ret.append((acc << (tobits - bits)) & maxv)
    elif bits >= frombits or ((acc << (tobits - bits)) & maxv):
        raise MalformedEncodingError("Invalid padding in payload")

    return ret
