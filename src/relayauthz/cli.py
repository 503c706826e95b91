"""
Command-line entry point.

    relayauthz [serve] [--config PATH] [--listen ADDR] [--log-level LEVEL]
    relayauthz decode ENTITY
    relayauthz encode HEX
"""

import argparse
import sys
from typing import List, Optional

from .errors import ConfigError, IdentityError, TransportError
from .identity import decode_entity, encode_public_key, key_from_hex
from .settings import load_settings

COMMANDS = ('serve', 'decode', 'encode')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='relayauthz',
        description='NIP-42 allowlist authorization server for Nostr relays',
    )
    subparsers = parser.add_subparsers(dest='command')

    serve_parser = subparsers.add_parser('serve', help='run the gRPC authorization server')
    serve_parser.add_argument('--config', help='path to policy-config.toml')
    serve_parser.add_argument('--listen', help='listen address, overrides the config file')
    serve_parser.add_argument('--log-level', help='DEBUG, INFO, WARN or ERROR')

    decode_parser = subparsers.add_parser('decode', help='decode a NIP-19 entity to hex')
    decode_parser.add_argument('entity')

    encode_parser = subparsers.add_parser('encode', help='encode a hex public key as npub')
    encode_parser.add_argument('key_hex')

    return parser


def _run_serve(args) -> int:
    # Imported here so decode/encode work without the gRPC stack loaded
    from .rpc.server import serve

    try:
        settings = load_settings(args.config).with_overrides(
            listen_address=args.listen,
            log_level=args.log_level,
        )
    except ConfigError as e:
        print(f"Failed to load config: {e}", file=sys.stderr)
        return 1

    try:
        serve(settings)
    except IdentityError as e:
        print(f"Failed to create server: {e}", file=sys.stderr)
        return 1
    except TransportError as e:
        print(f"Failed to serve: {e}", file=sys.stderr)
        return 1

    return 0


def _run_decode(args) -> int:
    try:
        kind, payload = decode_entity(args.entity)
    except IdentityError as e:
        print(f"Failed to decode: {e}", file=sys.stderr)
        return 1
    print(f"{kind} {payload.hex()}")
    return 0


def _run_encode(args) -> int:
    try:
        print(encode_public_key(key_from_hex(args.key_hex)))
    except IdentityError as e:
        print(f"Failed to encode: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    # serve is the default command
    if not argv or (argv[0] not in COMMANDS and argv[0] not in ('-h', '--help')):
        argv.insert(0, 'serve')

    args = build_parser().parse_args(argv)

    if args.command == 'decode':
        return _run_decode(args)
    if args.command == 'encode':
        return _run_encode(args)
    return _run_serve(args)


if __name__ == '__main__':
    sys.exit(main())
