"""
Domain-specific exceptions for relay-authz.
All exceptions are explicit and carry meaningful context.

An admission DENY is a normal decision, not an exception.
"""

from typing import Optional


class RelayAuthzError(Exception):
    """Base exception for all relay-authz errors."""
    pass


class IdentityError(RelayAuthzError):
    """Base exception for identity-related errors."""
    pass


class DecodeError(IdentityError):
    """
    Raised when an encoded identity cannot be turned into a key.

    Attributes:
        encoded: The offending input (as given)
        index: Position of the input within a batch, if decoded in one
    """

    def __init__(self, message: str, encoded: object = None, index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.encoded = encoded
        self.index = index

    def at_position(self, index: int) -> 'DecodeError':
        """Return a copy of this error that names its position in a batch."""
        error = self.__class__.__new__(self.__class__)
        error.__dict__.update(self.__dict__)
        error.index = index
        error.args = (f"entry {index}: {self.message}",)
        return error

    def __str__(self) -> str:
        if self.index is not None:
            return f"entry {self.index}: {self.message}"
        return self.message


class MalformedEncodingError(DecodeError):
    """Raised when structural validation or checksum verification fails."""
    pass


class UnexpectedKindError(DecodeError):
    """Raised when a well-formed encoding carries the wrong kind tag."""

    def __init__(
        self,
        message: str,
        kind: str,
        encoded: object = None,
        index: Optional[int] = None,
    ):
        super().__init__(message, encoded=encoded, index=index)
        self.kind = kind


class InvalidKeyError(IdentityError):
    """Raised when a canonical key is malformed or not a curve point."""
    pass


class ConfigError(RelayAuthzError):
    """Raised when runtime configuration cannot be loaded or is invalid."""
    pass


class TransportError(RelayAuthzError):
    """Raised when the RPC endpoint cannot be started."""
    pass


class InvariantViolationError(RelayAuthzError):
    """Raised when a core invariant is violated."""
    pass
