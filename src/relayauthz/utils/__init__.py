"""Utility modules for relay-authz."""

from . import canonical_json

__all__ = ['canonical_json']
