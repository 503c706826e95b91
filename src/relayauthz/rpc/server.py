"""
gRPC endpoint for the nauthz Authorization service.

The servicer converts wire messages into admission requests, asks the
engine, and converts the decision back. DENY is always a normal reply,
never an RPC error.
"""

import logging
import signal
from concurrent import futures
from typing import Optional, Tuple

import grpc

from ..config import (
    RPC_SERVICE,
    RPC_METHOD_EVENT_ADMIT,
    DECISION_PERMIT as POLICY_PERMIT,
    DEFAULT_MAX_WORKERS,
    DEFAULT_GRACE_PERIOD,
    ROOT_LOGGER_NAME,
)
from ..engine import AdmissionEngine
from ..errors import RelayAuthzError, TransportError
from ..logger import get_logger, parse_log_level, shutdown_logging
from ..policy import AdmissionRequest, AdmissionDecision, EventDescriptor
from ..settings import Settings
from .messages import EventRequest, EventReply, DECISION_PERMIT, DECISION_DENY

logger = logging.getLogger(__name__)


def request_from_message(message) -> AdmissionRequest:
    """
    Convert an EventRequest message into an AdmissionRequest.

    An unset auth_pubkey becomes None; a set but empty one stays b"".
    An unset event becomes None.
    """
    identity = None
    if message.HasField('auth_pubkey'):
        identity = bytes(message.auth_pubkey)

    event = None
    if message.HasField('event'):
        event = EventDescriptor(
            author_key=bytes(message.event.pubkey),
            kind=message.event.kind,
            event_id=bytes(message.event.id) or None,
        )

    return AdmissionRequest(authenticated_identity=identity, event=event)


def reply_from_decision(decision: AdmissionDecision):
    """
    Convert an AdmissionDecision into an EventReply message.

    message is only set when the decision carries one.
    """
    reply = EventReply(
        decision=DECISION_PERMIT if decision.decision == POLICY_PERMIT else DECISION_DENY,
    )
    if decision.message is not None:
        reply.message = decision.message
    return reply


class AuthorizationServicer:
    """
    Serves nauthz.Authorization/EventAdmit from an AdmissionEngine.
    """

    def __init__(self, engine: AdmissionEngine):
        self.engine = engine

    def EventAdmit(self, request, context):
        decision = self.engine.decide(request_from_message(request))
        return reply_from_decision(decision)


def create_server(
    engine: AdmissionEngine,
    listen_address: str,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> Tuple[grpc.Server, int]:
    """
    Create a gRPC server bound to listen_address.

    The server is returned unstarted.

    Args:
        engine: Admission engine to serve
        listen_address: host:port to bind (port 0 picks a free port)
        max_workers: Thread pool size

    Returns:
        Tuple of (server, bound port)

    Raises:
        TransportError: If the address cannot be bound
    """
    servicer = AuthorizationServicer(engine)
    handler = grpc.method_handlers_generic_handler(
        RPC_SERVICE,
        {
            RPC_METHOD_EVENT_ADMIT: grpc.unary_unary_rpc_method_handler(
                servicer.EventAdmit,
                request_deserializer=EventRequest.FromString,
                response_serializer=EventReply.SerializeToString,
            ),
        },
    )

    server = grpc.server(futures.ThreadPoolExecutor(max_workers=max_workers))
    server.add_generic_rpc_handlers((handler,))

    try:
        port = server.add_insecure_port(listen_address)
    except RuntimeError as e:
        raise TransportError(f"failed to listen on {listen_address}: {e}")

    if port == 0:
        raise TransportError(f"failed to listen on {listen_address}")

    return server, port


def serve(
    settings: Settings,
    engine: Optional[AdmissionEngine] = None,
    grace: float = DEFAULT_GRACE_PERIOD,
):
    """
    Build the engine and serve until interrupted.

    Starts the background log writer first and flushes it on the way out,
    whether serving ends normally or startup fails.

    Args:
        settings: Runtime settings
        engine: Prebuilt engine (built from settings when omitted)
        grace: Seconds in-flight calls get on shutdown

    Raises:
        DecodeError: If a configured npub is invalid
        TransportError: If the listener cannot be bound
    """
    get_logger(ROOT_LOGGER_NAME, parse_log_level(settings.log_level))

    try:
        _run(settings, engine, grace)
    except RelayAuthzError as e:
        logger.error("Failed to serve: %s", e)
        raise
    finally:
        shutdown_logging()


def _run(settings, engine, grace):
    if engine is None:
        engine = AdmissionEngine.from_settings(settings)

    server, port = create_server(engine, settings.listen_address, settings.max_workers)
    server.start()

    def _stop(signum, frame):
        logger.info("Received signal %s, shutting down", signum)
        server.stop(grace)

    signal.signal(signal.SIGTERM, _stop)

    print(f"NIP-42 Authorization Server listening on {settings.listen_address}")
    logger.info(
        "Serving %s with %d allowlisted keys on port %d",
        RPC_SERVICE, len(engine.allowlist), port,
    )

    try:
        server.wait_for_termination()
    except KeyboardInterrupt:
        server.stop(grace).wait()
