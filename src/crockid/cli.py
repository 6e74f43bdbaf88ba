"""crockid command line.

Provides the ``crockid`` console script and the ``python -m crockid`` entry point.
Every command prints JSON on stdout; failures print a JSON error object on
stderr and exit non-zero.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from typing import Any

from pydantic import ValidationError

from crockid import checksum, codec, ids
from crockid.config import LOG_LEVELS, Settings
from crockid.errors import CodecError
from crockid.obs.redaction import redact_code
from crockid.obs.setup import configure_logging
from crockid.ticketid import (
    TicketIDError,
    decode_ticket_id,
    format_ticket_id,
    generate,
    generate_sequence,
    is_valid_ticket_id,
)
from crockid.version import __version__

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_OK = 0
EXIT_INVALID = 1
EXIT_BAD_ARGS = 2


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _output(data: Any, *, fmt: str = "json", pretty: bool = False) -> None:
    if fmt == "jsonl":
        if isinstance(data, list):
            for item in data:
                print(json.dumps(item, default=str))
        else:
            print(json.dumps(data, default=str))
    else:
        indent = 2 if pretty else None
        print(json.dumps(data, default=str, indent=indent))


def _err(msg: str) -> None:
    print(msg, file=sys.stderr)


def _fail(exc: CodecError | TicketIDError) -> int:
    _err(json.dumps(exc.to_dict(), default=str))
    return EXIT_INVALID


def _fail_settings(exc: ValidationError) -> int:
    errors = [{"field": ".".join(map(str, e["loc"])), "message": e["msg"]} for e in exc.errors()]
    payload = {"code": "INVALID_SETTINGS", "message": "invalid configuration", "errors": errors}
    _err(json.dumps(payload))
    return EXIT_BAD_ARGS


def _settings(args: argparse.Namespace) -> Settings:
    return args.settings  # type: ignore[no-any-return]


def _maybe_group(code: str, args: argparse.Namespace) -> str:
    if getattr(args, "group", False):
        return codec.group(code, _settings(args).group_size)
    return code


# ---------------------------------------------------------------------------
# Codec commands
# ---------------------------------------------------------------------------


def _cmd_encode(args: argparse.Namespace) -> int:
    settings = _settings(args)
    try:
        if args.compact:
            code = codec.encode_compact(args.value)
        else:
            code = codec.encode_fixed(args.value, args.length or settings.default_length)
    except CodecError as exc:
        return _fail(exc)

    with_checksum = settings.checksum_by_default if args.checksum is None else args.checksum
    if with_checksum:
        code = checksum.append(code)
    _output(
        {"value": args.value, "code": _maybe_group(code, args), "checksum": with_checksum},
        fmt=args.format,
        pretty=args.pretty,
    )
    return EXIT_OK


def _cmd_decode(args: argparse.Namespace) -> int:
    normalized = codec.normalize(args.code)
    data = normalized
    if args.checksum:
        if not checksum.validate(normalized):
            logger.debug("checksum mismatch for %s", redact_code(normalized))
            _err(json.dumps({"code": "INVALID_CHECKSUM", "message": "checksum validation failed"}))
            return EXIT_INVALID
        data = checksum.strip(normalized)
    try:
        value = codec.decode(data)
    except CodecError as exc:
        return _fail(exc)
    _output({"code": normalized, "value": value}, fmt=args.format, pretty=args.pretty)
    return EXIT_OK


def _cmd_normalize(args: argparse.Namespace) -> int:
    normalized = codec.normalize(args.text)
    invalid = [
        {"char": c, "position": i} for i, c in enumerate(normalized) if not codec.is_valid_char(c)
    ]
    _output(
        {"input": args.text, "normalized": normalized, "invalid": invalid},
        fmt=args.format,
        pretty=args.pretty,
    )
    return EXIT_OK if not invalid else EXIT_INVALID


def _cmd_random(args: argparse.Namespace) -> int:
    if args.count < 1:
        _err("--count must be at least 1")
        return EXIT_BAD_ARGS
    try:
        codes = [
            _maybe_group(ids.random_code(args.length, with_checksum=not args.no_checksum), args)
            for _ in range(args.count)
        ]
    except CodecError as exc:
        return _fail(exc)
    _output(codes if args.count > 1 else codes[0], fmt=args.format, pretty=args.pretty)
    return EXIT_OK


# ---------------------------------------------------------------------------
# Checksum commands
# ---------------------------------------------------------------------------


def _cmd_checksum_calc(args: argparse.Namespace) -> int:
    try:
        check = checksum.calculate(args.data)
    except CodecError as exc:
        return _fail(exc)
    _output({"data": args.data, "checksum": check}, fmt=args.format, pretty=args.pretty)
    return EXIT_OK


def _cmd_checksum_append(args: argparse.Namespace) -> int:
    try:
        code = checksum.append(args.data)
    except CodecError as exc:
        return _fail(exc)
    _output(
        {"data": args.data, "code": _maybe_group(code, args)},
        fmt=args.format,
        pretty=args.pretty,
    )
    return EXIT_OK


def _cmd_checksum_validate(args: argparse.Namespace) -> int:
    valid = checksum.validate(codec.normalize(args.code))
    _output({"code": args.code, "valid": valid}, fmt=args.format, pretty=args.pretty)
    return EXIT_OK if valid else EXIT_INVALID


def _cmd_checksum_strip(args: argparse.Namespace) -> int:
    _output(
        {"code": args.code, "data": checksum.strip(args.code)},
        fmt=args.format,
        pretty=args.pretty,
    )
    return EXIT_OK


def _cmd_checksum_extract(args: argparse.Namespace) -> int:
    _output(
        {"code": args.code, "checksum": checksum.extract(args.code)},
        fmt=args.format,
        pretty=args.pretty,
    )
    return EXIT_OK


# ---------------------------------------------------------------------------
# Ticket commands
# ---------------------------------------------------------------------------


def _cmd_ticket_generate(args: argparse.Namespace) -> int:
    sequence = generate_sequence() if args.sequence is None else args.sequence
    try:
        ticket_id = generate(args.event, args.date, args.category, args.seat, sequence)
    except TicketIDError as exc:
        return _fail(exc)
    _output(
        {"ticket_id": ticket_id, "formatted": format_ticket_id(ticket_id), "sequence": sequence},
        fmt=args.format,
        pretty=args.pretty,
    )
    return EXIT_OK


def _cmd_ticket_decode(args: argparse.Namespace) -> int:
    try:
        ticket = decode_ticket_id(args.ticket_id)
    except TicketIDError as exc:
        return _fail(exc)
    _output(ticket.model_dump(mode="json", by_alias=True), fmt=args.format, pretty=args.pretty)
    return EXIT_OK


def _cmd_ticket_format(args: argparse.Namespace) -> int:
    normalized = codec.normalize(args.ticket_id)
    _output({"formatted": format_ticket_id(normalized)}, fmt=args.format, pretty=args.pretty)
    return EXIT_OK


def _cmd_ticket_validate(args: argparse.Namespace) -> int:
    valid = is_valid_ticket_id(args.ticket_id)
    _output({"ticket_id": args.ticket_id, "valid": valid}, fmt=args.format, pretty=args.pretty)
    return EXIT_OK if valid else EXIT_INVALID


# ---------------------------------------------------------------------------
# Argument parser construction
# ---------------------------------------------------------------------------


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative: {raw!r}")
    return value


def _iso_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {raw!r}") from None


def _build_parser() -> argparse.ArgumentParser:
    # Common flags shared by all leaf subcommands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--format", choices=["json", "jsonl"], default="json", help="Output format"
    )
    common.add_argument("--pretty", action="store_true", default=False, help="Pretty-print output")
    common.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Override CROCKID_LOG_LEVEL",
    )

    parser = argparse.ArgumentParser(
        prog="crockid",
        description="Crockford Base32 identifiers with CRC-10 checksums",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    # ---- encode ----
    encode = subparsers.add_parser("encode", parents=[common], help="Encode an integer")
    encode.add_argument("value", type=_non_negative_int, help="Unsigned 64-bit integer")
    width = encode.add_mutually_exclusive_group()
    width.add_argument("--length", type=int, default=None, help="Fixed width in symbols")
    width.add_argument("--compact", action="store_true", help="Minimum width, no padding")
    encode.add_argument(
        "--checksum",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Append a 2-symbol checksum (default from CROCKID_CHECKSUM_BY_DEFAULT)",
    )
    encode.add_argument("--group", action="store_true", help="Insert dashes for display")

    # ---- decode ----
    decode = subparsers.add_parser("decode", parents=[common], help="Decode an identifier")
    decode.add_argument("code", help="Identifier (dashes, spaces and case are ignored)")
    decode.add_argument(
        "--checksum", action="store_true", help="Verify and strip a trailing checksum first"
    )

    # ---- normalize ----
    normalize = subparsers.add_parser("normalize", parents=[common], help="Canonicalise input")
    normalize.add_argument("text", help="Text as typed by a human")

    # ---- random ----
    random = subparsers.add_parser("random", parents=[common], help="Generate random codes")
    random.add_argument("--length", type=int, default=10, help="Data symbols per code")
    random.add_argument("--count", type=int, default=1, help="Number of codes")
    random.add_argument("--no-checksum", action="store_true", help="Omit the checksum")
    random.add_argument("--group", action="store_true", help="Insert dashes for display")

    # ---- checksum ----
    checksum_parser = subparsers.add_parser("checksum", help="CRC-10 checksum helpers")
    checksum_sub = checksum_parser.add_subparsers(dest="checksum_command")

    calc = checksum_sub.add_parser("calc", parents=[common], help="Compute the checksum")
    calc.add_argument("data", help="Base32 data")

    append = checksum_sub.add_parser("append", parents=[common], help="Append the checksum")
    append.add_argument("data", help="Base32 data")
    append.add_argument("--group", action="store_true", help="Insert dashes for display")

    validate = checksum_sub.add_parser("validate", parents=[common], help="Verify a code")
    validate.add_argument("code", help="Checksummed code")

    strip = checksum_sub.add_parser("strip", parents=[common], help="Drop the checksum")
    strip.add_argument("code", help="Checksummed code")

    extract = checksum_sub.add_parser("extract", parents=[common], help="Show the checksum")
    extract.add_argument("code", help="Checksummed code")

    # ---- ticket ----
    ticket_parser = subparsers.add_parser("ticket", help="Event ticket IDs")
    ticket_sub = ticket_parser.add_subparsers(dest="ticket_command")

    t_generate = ticket_sub.add_parser("generate", parents=[common], help="Generate a ticket ID")
    t_generate.add_argument("--event", required=True, help="Event id")
    t_generate.add_argument("--date", required=True, type=_iso_date, help="Event date (YYYY-MM-DD)")
    t_generate.add_argument("--category", required=True, help="Category id")
    t_generate.add_argument("--seat", required=True, help="Seat id")
    t_generate.add_argument(
        "--sequence", type=_non_negative_int, default=None, help="Sequence (default: generated)"
    )

    t_decode = ticket_sub.add_parser("decode", parents=[common], help="Decode a ticket ID")
    t_decode.add_argument("ticket_id", help="Ticket ID")

    t_format = ticket_sub.add_parser("format", parents=[common], help="Add dashes to a ticket ID")
    t_format.add_argument("ticket_id", help="Ticket ID")

    t_validate = ticket_sub.add_parser("validate", parents=[common], help="Verify a ticket ID")
    t_validate.add_argument("ticket_id", help="Ticket ID")

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

_CHECKSUM_COMMANDS = {
    "calc": _cmd_checksum_calc,
    "append": _cmd_checksum_append,
    "validate": _cmd_checksum_validate,
    "strip": _cmd_checksum_strip,
    "extract": _cmd_checksum_extract,
}

_TICKET_COMMANDS = {
    "generate": _cmd_ticket_generate,
    "decode": _cmd_ticket_decode,
    "format": _cmd_ticket_format,
    "validate": _cmd_ticket_validate,
}


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns an integer exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_BAD_ARGS

    overrides = {"log_level": args.log_level} if getattr(args, "log_level", None) else {}
    try:
        settings = Settings(**overrides)
    except ValidationError as exc:
        return _fail_settings(exc)
    configure_logging(settings)
    args.settings = settings

    if args.command == "encode":
        if args.length is not None and args.length < 1:
            _err("--length must be at least 1")
            return EXIT_BAD_ARGS
        return _cmd_encode(args)
    if args.command == "decode":
        return _cmd_decode(args)
    if args.command == "normalize":
        return _cmd_normalize(args)
    if args.command == "random":
        return _cmd_random(args)

    if args.command == "checksum":
        handler = _CHECKSUM_COMMANDS.get(getattr(args, "checksum_command", None) or "")
        if handler is None:
            parser.parse_args(["checksum", "--help"])
            return EXIT_BAD_ARGS
        return handler(args)

    if args.command == "ticket":
        handler = _TICKET_COMMANDS.get(getattr(args, "ticket_command", None) or "")
        if handler is None:
            parser.parse_args(["ticket", "--help"])
            return EXIT_BAD_ARGS
        return handler(args)

    parser.print_help()
    return EXIT_BAD_ARGS
