"""Read-only message catalog backed by ``.properties`` files."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``key=value`` lines; the first definition of a key wins.

    Blank lines and lines starting with ``#`` are skipped. Lines without
    ``=`` define the key with an empty value.
    """
    entries: dict[str, str] = {}
    for line in text.splitlines():
        if not line.strip() or line.startswith("#"):
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        if key and key not in entries:
            entries[key] = value.strip()
    return entries


class MessageCatalog(Mapping[str, str]):
    """Immutable key -> template mapping."""

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries = dict(entries or {})

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, key: str) -> str | None:
        return self._entries.get(key)

    def is_defined(self, key: str) -> bool:
        return key in self._entries

    def keys_matching(self, fragment: str) -> list[str]:
        """Keys containing ``fragment`` case-insensitively, sorted."""
        needle = fragment.lower()
        return sorted(key for key in self._entries if needle in key.lower())


def _iter_catalog_files(root: Path, globs: Iterable[str]) -> list[Path]:
    seen: set[Path] = set()
    ordered: list[Path] = []
    for pattern in globs:
        matches = sorted(
            (path for path in root.glob(pattern) if path.is_file()),
            key=lambda p: p.relative_to(root).as_posix(),
        )
        for path in matches:
            if path not in seen:
                seen.add(path)
                ordered.append(path)
    return ordered


def load_catalog(root: Path, globs: Iterable[str]) -> MessageCatalog:
    """Load every file matching ``globs`` under ``root``.

    Globs are expanded in the order given, files within a glob in sorted
    order; earlier files win on duplicate keys. Unreadable files are skipped.
    """
    entries: dict[str, str] = {}
    for path in _iter_catalog_files(root, globs):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable catalog %s: %s", path, exc)
            continue
        for key, value in parse_properties(text).items():
            entries.setdefault(key, value)
        logger.debug("Loaded catalog %s", path)

    logger.info("Loaded %d message keys", len(entries))
    return MessageCatalog(entries)


class DuplicateKeyError(ValueError):
    """Raised when a key to insert is already defined in the target file."""


def find_key_location(
    root: Path, globs: Iterable[str], key: str
) -> tuple[Path, int] | None:
    """Return the first ``(file, line)`` defining ``key``, line 1-based.

    Files are searched in the same order :func:`load_catalog` reads them.
    """
    prefix = f"{key}="
    for path in _iter_catalog_files(root, globs):
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable catalog %s: %s", path, exc)
            continue
        for index, line in enumerate(lines):
            if line.strip().startswith(prefix):
                return path, index + 1
    return None


def _line_key(line: str) -> str:
    return line.split("=", 1)[0].strip()


def _collation_key(key: str) -> tuple[str, str]:
    return key.casefold(), key


def insert_key(path: Path, key: str) -> int:
    """Insert an empty ``key=`` entry in sorted position; return its 1-based line.

    The entry goes directly before the key that follows it in sorted order,
    or at the end of the file when it sorts last. Line endings and a trailing
    newline are preserved.

    Raises:
        DuplicateKeyError: ``key`` already appears in the file.
    """
    raw = path.read_text(encoding="utf-8")
    newline = "\r\n" if "\r\n" in raw else "\n"
    lines = raw.splitlines()

    keys = [
        line_key
        for line_key in map(_line_key, lines)
        if line_key and not line_key.startswith("#")
    ]
    if key in keys:
        msg = f'"{key}" already exists in {path.name}'
        raise DuplicateKeyError(msg)

    key_lines: dict[str, int] = {}
    for index, line in enumerate(lines):
        line_key = _line_key(line)
        if line_key and not line_key.startswith("#") and "=" in line:
            key_lines[line_key] = index

    ordered = sorted([*keys, key], key=_collation_key)
    position = ordered.index(key)
    if position == len(ordered) - 1:
        insert_at = len(lines)
    else:
        insert_at = key_lines.get(ordered[position + 1], len(lines))

    lines.insert(insert_at, f"{key}=")
    trailing = newline if not raw or raw.endswith(("\n", "\r")) else ""
    path.write_text(newline.join(lines) + trailing, encoding="utf-8", newline="")
    logger.info("Added %s= to %s at line %d", key, path, insert_at + 1)
    return insert_at + 1


__all__ = [
    "DuplicateKeyError",
    "MessageCatalog",
    "find_key_location",
    "insert_key",
    "load_catalog",
    "parse_properties",
]
