"""
Immutable allowlist of canonical keys.
Built once at startup; membership is the only query.
"""

import logging
from typing import Iterable, Iterator

from ..errors import InvalidKeyError
from ..identity.codec import decode_all
from ..identity.keys import key_to_hex, validate_point
from ..invariants import validate_canonical_key

logger = logging.getLogger(__name__)


class Allowlist:
    """
    A frozen set of 32-byte public keys permitted to publish.
    """

    __slots__ = ('_keys',)

    def __init__(self, keys: Iterable[bytes] = ()):
        """
        Initialize allowlist from canonical keys.

        Args:
            keys: 32-byte keys; duplicates collapse

        Raises:
            InvalidKeyError: If any key is not 32 bytes
        """
        frozen = []
        for key in keys:
            if isinstance(key, (bytearray, memoryview)):
                key = bytes(key)
            validate_canonical_key(key)
            frozen.append(key)
        self._keys = frozenset(frozen)

    @classmethod
    def from_encodings(
        cls,
        encodings: Iterable[str],
        verify_curve_points: bool = False,
    ) -> 'Allowlist':
        """
        Build an allowlist from npub strings.

        Either every entry is accepted or none is.

        Args:
            encodings: npub strings (any iterable, consumed once)
            verify_curve_points: Also require each key to be a secp256k1 point

        Returns:
            Allowlist instance

        Raises:
            DecodeError: If an entry fails to decode (index set)
            InvalidKeyError: If point validation fails for an entry
        """
        encodings = list(encodings)
        keys = decode_all(encodings)

        if verify_curve_points:
            for index, key in enumerate(keys):
                try:
                    validate_point(key)
                except InvalidKeyError as e:
                    raise InvalidKeyError(f"entry {index} ({encodings[index]}): {e}") from e

        allowlist = cls(keys)
        logger.debug("Allowlist built with %d keys from %d entries", len(allowlist), len(encodings))
        return allowlist

    def __contains__(self, key: object) -> bool:
        # Exact byte match; anything that is not bytes is never a member
        if isinstance(key, (bytearray, memoryview)):
            key = bytes(key)
        return isinstance(key, bytes) and key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[bytes]:
        return iter(sorted(self._keys))

    def __repr__(self) -> str:
        return f"Allowlist({len(self._keys)} keys)"

    def to_hex(self) -> list[str]:
        """List members as sorted lowercase hex."""
        return [key_to_hex(key) for key in self]
