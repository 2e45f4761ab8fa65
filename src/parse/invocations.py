"""Regex-driven call-site scanning over raw source text.

Nothing here parses the host language. A call site is any ``<name>(`` that
matches a configured method name; its argument list is recovered by paren
depth counting and split by :func:`parse.arguments.safe_split`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from parse.arguments import ArgumentExpression, classify_argument, safe_split

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Invocation:
    """A raw ``<name>(`` match."""

    pattern: str
    matched_text: str
    start_offset: int
    open_offset: int


@dataclass(frozen=True)
class ArgumentList:
    """Text strictly between a call's balanced parentheses.

    ``close_offset`` is None when the parentheses never balanced and the text
    runs to the end of the document.
    """

    text: str
    open_offset: int
    close_offset: int | None

    @property
    def balanced(self) -> bool:
        return self.close_offset is not None


@dataclass(frozen=True)
class CallSite:
    """A located call referencing a message key."""

    matched_text: str
    start_offset: int
    key: str
    key_range: tuple[int, int]
    argument_list_text: str
    arguments: tuple[ArgumentExpression, ...]


def compile_invocation_pattern(name: str) -> re.Pattern[str]:
    """Build the ``<name>\\s*(`` matcher for a configured method name."""
    return re.compile(re.escape(name) + r"\s*\(")


def find_invocations(text: str, patterns: Iterable[str]) -> tuple[Invocation, ...]:
    """Find all non-overlapping invocations, pattern by pattern.

    Matches for one pattern are reported left to right; patterns are scanned
    in the order given. Empty pattern names are ignored.
    """
    found: list[Invocation] = []
    for name in patterns:
        if not name:
            continue
        for match in compile_invocation_pattern(name).finditer(text):
            found.append(
                Invocation(
                    pattern=name,
                    matched_text=match.group(0),
                    start_offset=match.start(),
                    open_offset=match.end() - 1,
                )
            )
    return tuple(found)


def extract_argument_list(text: str, open_offset: int) -> ArgumentList:
    """Return the text between the paren at ``open_offset`` and its match.

    Depth counting only; quoted parens are not special at this stage. If the
    depth never returns to zero the rest of the document is taken.
    """
    depth = 0
    for index in range(open_offset, len(text)):
        ch = text[index]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return ArgumentList(
                    text=text[open_offset + 1 : index],
                    open_offset=open_offset,
                    close_offset=index,
                )

    logger.debug("Unbalanced parentheses at offset %d; consuming to end", open_offset)
    return ArgumentList(
        text=text[open_offset + 1 :],
        open_offset=open_offset,
        close_offset=None,
    )


def _strip_key_quotes(raw_key: str) -> tuple[str, int]:
    """Strip surrounding double quotes; return (key, offset shift)."""
    shift = 0
    key = raw_key
    if key.startswith('"'):
        key = key[1:]
        shift = 1
    if key.endswith('"'):
        key = key[:-1]
    return key, shift


def _first_argument_offset(argument_text: str) -> int:
    """Offset of the first non-whitespace character of the argument list."""
    return len(argument_text) - len(argument_text.lstrip())


def scan_call_sites(text: str, patterns: Iterable[str]) -> tuple[CallSite, ...]:
    """Locate every call site for ``patterns`` and split its arguments.

    The first top-level argument is the message key; the rest are the
    substitution arguments. Calls with an empty argument list are skipped.
    """
    sites: list[CallSite] = []
    for invocation in find_invocations(text, patterns):
        argument_list = extract_argument_list(text, invocation.open_offset)
        pieces = safe_split(argument_list.text)
        if not pieces:
            continue

        key, shift = _strip_key_quotes(pieces[0])
        key_start = (
            argument_list.open_offset
            + 1
            + _first_argument_offset(argument_list.text)
            + shift
        )
        arguments = tuple(classify_argument(piece) for piece in pieces[1:])

        sites.append(
            CallSite(
                matched_text=invocation.matched_text,
                start_offset=invocation.start_offset,
                key=key,
                key_range=(key_start, key_start + len(key)),
                argument_list_text=argument_list.text,
                arguments=arguments,
            )
        )
    return tuple(sites)


__all__ = [
    "ArgumentList",
    "CallSite",
    "Invocation",
    "compile_invocation_pattern",
    "extract_argument_list",
    "find_invocations",
    "scan_call_sites",
]
