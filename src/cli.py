"""Command-line interface for msgkey-navigator."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

from catalog.properties import (
    DuplicateKeyError,
    find_key_location,
    insert_key,
    load_catalog,
)
from check.runner import check_repository
from rules.config import ConfigError, load_config


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: .)",
    )


def _add_root_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        default=".",
        help="Repository root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="msgkeys")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Check message keys and placeholder arguments"
    )
    _add_common_paths(check_parser)
    check_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    locate_parser = subparsers.add_parser(
        "locate", help="Print the file and line defining a message key"
    )
    locate_parser.add_argument("key", help="Message key to look up")
    _add_root_option(locate_parser)

    add_parser = subparsers.add_parser(
        "add", help="Insert an empty message key into a .properties file"
    )
    add_parser.add_argument("key", help="Message key to add")
    add_parser.add_argument(
        "file",
        help="Target .properties file or glob, relative to the root",
    )
    _add_root_option(add_parser)

    keys_parser = subparsers.add_parser(
        "keys", help="List catalog keys containing a fragment"
    )
    keys_parser.add_argument(
        "fragment",
        nargs="?",
        default="",
        help="Case-insensitive substring filter (default: list all keys)",
    )
    _add_root_option(keys_parser)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _handle_check(root: Path, output_format: str) -> int:
    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    result = check_repository(root, config)

    if output_format == "json":
        opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
        sys.stdout.write(orjson.dumps(result.to_dict(), option=opts).decode("utf-8"))
        sys.stdout.write("\n")
    else:
        for item in result.diagnostics:
            diagnostic = item.diagnostic
            sys.stderr.write(
                f"{item.location()}: {diagnostic.severity.value}: "
                f"{diagnostic.message}\n"
            )

    return 0 if result.ok else 1


def _handle_locate(root: Path, key: str) -> int:
    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    location = find_key_location(root, config.property_file_globs, key)
    if location is None:
        sys.stderr.write(f"error: message key '{key}' is not defined\n")
        return 1

    path, line = location
    sys.stdout.write(f"{path.relative_to(root).as_posix()}:{line}\n")
    return 0


def _display_path(root: Path, path: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def _resolve_property_file(root: Path, file_arg: str) -> Path | None:
    candidate = root / file_arg
    if candidate.is_file():
        return candidate
    if Path(file_arg).is_absolute():
        return None
    matches = sorted(
        (path for path in root.glob(file_arg) if path.is_file()),
        key=lambda p: p.relative_to(root).as_posix(),
    )
    return matches[0] if matches else None


def _handle_add(root: Path, key: str, file_arg: str) -> int:
    target = _resolve_property_file(root, file_arg)
    if target is None:
        sys.stderr.write(f"error: property file not found: {file_arg}\n")
        return 2

    try:
        line = insert_key(target, key)
    except DuplicateKeyError as exc:
        sys.stderr.write(f"warning: {exc}\n")
        return 1

    sys.stdout.write(f"{_display_path(root, target)}:{line}\n")
    return 0


def _handle_keys(root: Path, fragment: str) -> int:
    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    catalog = load_catalog(root, config.property_file_globs)
    for key in catalog.keys_matching(fragment):
        sys.stdout.write(f"{key}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    root = Path(args.root).expanduser().resolve()

    if args.command == "check":
        return _handle_check(root, args.format)

    if args.command == "locate":
        return _handle_locate(root, args.key)

    if args.command == "add":
        return _handle_add(root, args.key, args.file)

    if args.command == "keys":
        return _handle_keys(root, args.fragment)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
