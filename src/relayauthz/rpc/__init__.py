"""gRPC boundary for relay-authz."""

from .messages import (
    Event,
    EventRequest,
    EventReply,
    Nip05Name,
    DECISION_UNSPECIFIED,
    DECISION_PERMIT,
    DECISION_DENY,
)
from .server import (
    AuthorizationServicer,
    request_from_message,
    reply_from_decision,
    create_server,
    serve,
)

__all__ = [
    'Event',
    'EventRequest',
    'EventReply',
    'Nip05Name',
    'DECISION_UNSPECIFIED',
    'DECISION_PERMIT',
    'DECISION_DENY',
    'AuthorizationServicer',
    'request_from_message',
    'reply_from_decision',
    'create_server',
    'serve',
]
