"""Command-line interface for parsing API response dumps."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import orjson

from .compare import ComparisonReport, compare_installations
from .envelope import decode_payload
from .exceptions import NeaparseError
from .installation import InstallationDataParser, InstallationDataParserV2
from .models import Install, User, UserData
from .projection import get_summary, get_typed
from .redact import debug_dump
from .user_data import UserDataParser

_LOGGER = logging.getLogger(__name__)

_RULE = "=" * 80


def _read_document(path: str) -> Any:
    """Read and decode a JSON dump."""
    file_path = Path(path).resolve()
    document = decode_payload(file_path.read_bytes())
    _LOGGER.debug("Loaded %s", file_path)
    debug_dump(file_path.name, document)
    return document


def _print_json(data: Any) -> None:
    print(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode())


def _emit(
    result: User | Install | UserData | None, *, summary: bool, typed: bool
) -> None:
    """Print one of the three output shapes of a parse result."""
    if result is None:
        print("No matching installation" if summary else "null")
    elif summary:
        print(get_summary(result))
    elif typed:
        _print_json(get_typed(result))
    else:
        _print_json(result)


def _print_report(report: ComparisonReport) -> None:
    """Display the per-check outcome of a comparison."""
    print(_RULE)
    print("COMPARISON SUMMARY")
    print(_RULE)
    for check in report.checks:
        status = "PASS" if check.passed else "FAIL"
        print(f"  [{status}] {check.name}: V1={check.v1!r} V2={check.v2!r}")
    print()
    failures = report.failures()
    if failures:
        print(f"{len(failures)} of {len(report.checks)} checks failed")
    else:
        print(f"All {len(report.checks)} checks passed")


def _cmd_installation(args: argparse.Namespace) -> None:
    document = _read_document(args.file)
    result: User | Install | None
    if args.v1:
        result = InstallationDataParser().parse(document, args.unique)
    else:
        result = InstallationDataParserV2().parse(document, args.unique)
    _emit(result, summary=args.summary, typed=args.typed)


def _cmd_userdata(args: argparse.Namespace) -> None:
    document = _read_document(args.file)
    result = UserDataParser().parse(document)
    _emit(result, summary=args.summary, typed=args.typed)


def _cmd_compare(args: argparse.Namespace) -> None:
    document = _read_document(args.file)
    v1 = InstallationDataParser(keep_raw=False).parse(document, args.unique)
    v2 = InstallationDataParserV2(keep_raw=False).parse(document, args.unique)
    print(_RULE)
    print("PARSER COMPARISON")
    print(_RULE)
    print("\n--- Parser V1 ---")
    print(get_summary(v1) if v1 is not None else "No matching installation")
    print("\n--- Parser V2 ---")
    print(get_summary(v2))
    print()
    _print_report(compare_installations(v1, v2))


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--summary",
        action="store_true",
        help="Output human-readable summary instead of JSON",
    )
    group.add_argument(
        "--typed",
        action="store_true",
        help="Output only typed properties (exclude raw data)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="neaparse",
        description="Heating cloud API response parser",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    installation = commands.add_parser(
        "installation", help="Parse an installation data response"
    )
    installation.add_argument("file", help="Path to the JSON response dump")
    _add_output_options(installation)
    installation.add_argument(
        "--unique", metavar="ID", help="Filter by installation unique ID"
    )
    installation.add_argument(
        "--v1",
        action="store_true",
        help="Use the single-installation parser",
    )
    installation.set_defaults(handler=_cmd_installation)

    userdata = commands.add_parser("userdata", help="Parse a user data response")
    userdata.add_argument("file", help="Path to the JSON response dump")
    _add_output_options(userdata)
    userdata.set_defaults(handler=_cmd_userdata)

    compare = commands.add_parser(
        "compare", help="Compare the V1 and V2 installation parsers"
    )
    compare.add_argument("file", help="Path to the JSON response dump")
    compare.add_argument(
        "--unique", metavar="ID", help="Compare this installation only"
    )
    compare.set_defaults(handler=_cmd_compare)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the neaparse CLI."""
    args = _build_parser().parse_args(argv)

    level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        args.handler(args)
    except FileNotFoundError:
        print(f"Error: File not found: {Path(args.file).resolve()}", file=sys.stderr)
        return 1
    except (NeaparseError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except orjson.JSONEncodeError as exc:
        print(f"Error: Cannot encode output: {exc}", file=sys.stderr)
        return 1
    return 0
