"""CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter

from forked_listeners.errors import ForkedRepresentationError, ListenerConfigurationError
from forked_listeners.launch import active_listeners, decode_listeners, encode_listeners
from forked_listeners.launch_file import load_launch_file
from forked_listeners.models.listener_definition import ListenerDefinition
from forked_listeners.models.test_definition import NamedTest

logger = logging.getLogger(__name__)

_LISTENERS_ADAPTER: TypeAdapter[list[ListenerDefinition]] = TypeAdapter(list[ListenerDefinition])


def encode(args: argparse.Namespace) -> None:
    spec = load_launch_file(Path(args.launch))
    test = NamedTest(name=args.test) if args.test else spec.test_definition()
    conditions = spec.conditions()
    base_dir = Path(spec.output_dir) if spec.output_dir else None
    for listener in active_listeners(spec.listeners, conditions):
        logger.info("Listener %s reports to %s", listener.implementation_id, listener.result_path(test, base_dir))
    data = encode_listeners(spec.listeners, conditions, test)
    if args.output:
        Path(args.output).write_bytes(data)
    else:
        sys.stdout.write(data.decode("utf-8") + "\n")


def decode(args: argparse.Namespace) -> None:
    data = Path(args.input).read_bytes() if args.input else sys.stdin.buffer.read()
    listeners = decode_listeners(data)
    print(_LISTENERS_ADAPTER.dump_json(listeners, indent=2, by_alias=True).decode("utf-8"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="forked-listeners")
    parser.add_argument("--log-level", type=str, default="WARNING")
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode_parser = subparsers.add_parser("encode", help="Write the forked representation of a launch file")
    encode_parser.add_argument("--launch", type=str, required=True, help="Path to a launch file")
    encode_parser.add_argument("--test", type=str, default=None, help="Test name for default result files")
    encode_parser.add_argument("--output", type=str, default=None, help="Write to a file instead of stdout")
    encode_parser.set_defaults(handler=encode)

    decode_parser = subparsers.add_parser("decode", help="Read a forked representation back as JSON")
    decode_parser.add_argument("--input", type=str, default=None, help="Path to a forked document (default: stdin)")
    decode_parser.set_defaults(handler=decode)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    try:
        args.handler(args)
    except (ForkedRepresentationError, ListenerConfigurationError) as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc
