"""Identity decoding for relay-authz."""

from .codec import decode, decode_all, decode_entity, encode, encode_public_key
from .keys import key_to_hex, key_from_hex, is_valid_point, validate_point

__all__ = [
    'decode',
    'decode_all',
    'decode_entity',
    'encode',
    'encode_public_key',
    'key_to_hex',
    'key_from_hex',
    'is_valid_point',
    'validate_point',
]
