"""Lexical argument-list tokenizer and argument shape classification."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

_OPENERS = {"(": ")", "{": "}", "[": "]"}
_CLOSERS = {")": "(", "}": "{", "]": "["}
_QUOTES = frozenset({'"', "'"})

_STRING_LITERAL = re.compile(r"""^(?:"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')$""", re.DOTALL)
_ARRAY_LITERAL = re.compile(
    r"new\s+[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*\s*\[\s*\]\s*\{(.*)\}\s*$",
    re.DOTALL,
)
_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
_CALL_NAME_BEFORE_PAREN = re.compile(r"\.\s*([A-Za-z_$][\w$]*)\s*$")


class ArgumentKind(str, Enum):
    """Structural shape of a top-level argument expression."""

    STRING_LITERAL = "string_literal"
    ARRAY_LITERAL = "array_literal"
    CHAINED_CALL = "chained_call"
    IDENTIFIER = "identifier"
    OTHER = "other"


@dataclass(frozen=True)
class ArgumentExpression:
    """A trimmed top-level argument with its shape decided once.

    ``elements`` is only populated for array literals; ``name`` and
    ``is_join`` only for chained calls.
    """

    text: str
    kind: ArgumentKind
    elements: tuple[ArgumentExpression, ...] = field(default_factory=tuple)
    name: str | None = None
    is_join: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.text

    @property
    def is_join_call(self) -> bool:
        return self.kind is ArgumentKind.CHAINED_CALL and self.is_join


def safe_split(text: str) -> list[str]:
    """Split an argument list on top-level commas.

    Commas inside quoted literals or nested ``()``, ``{}``, ``[]`` are not
    split points. A quote closes only on the same quote character when the
    preceding character is not a backslash. An unterminated literal runs to
    the end of the input.

    Empty input yields no pieces; otherwise the result has one more piece than
    there are top-level commas, each piece trimmed (empty pieces included).
    """
    if not text.strip():
        return []

    pieces: list[str] = []
    depth = {opener: 0 for opener in _OPENERS}
    buffer: list[str] = []
    quote_char: str | None = None
    previous = ""

    for ch in text:
        if quote_char is not None:
            buffer.append(ch)
            if ch == quote_char and previous != "\\":
                quote_char = None
            previous = ch
            continue

        if ch in _QUOTES:
            quote_char = ch
        elif ch in _OPENERS:
            depth[ch] += 1
        elif ch in _CLOSERS:
            depth[_CLOSERS[ch]] -= 1
        elif ch == "," and not any(depth.values()):
            pieces.append("".join(buffer).strip())
            buffer = []
            previous = ch
            continue

        buffer.append(ch)
        previous = ch

    pieces.append("".join(buffer).strip())
    return pieces


def _trailing_call_name(text: str) -> str | None:
    """Return the method name whose parentheses close the expression.

    ``a.b().join(",")`` -> ``"join"``; ``a.join(x).trim()`` -> ``"trim"``.
    Returns None unless the expression ends in ``.name(...)``.
    """
    if not text.endswith(")"):
        return None

    depth = 0
    for index in range(len(text) - 1, -1, -1):
        ch = text[index]
        if ch == ")":
            depth += 1
        elif ch == "(":
            depth -= 1
            if depth == 0:
                match = _CALL_NAME_BEFORE_PAREN.search(text, 0, index)
                if match is None:
                    return None
                return match.group(1)
    return None


def classify_argument(text: str) -> ArgumentExpression:
    """Classify one trimmed argument expression by its lexical shape."""
    text = text.strip()

    if _STRING_LITERAL.match(text):
        return ArgumentExpression(text=text, kind=ArgumentKind.STRING_LITERAL)

    array_match = _ARRAY_LITERAL.search(text)
    if array_match is not None:
        return ArgumentExpression(
            text=text,
            kind=ArgumentKind.ARRAY_LITERAL,
            elements=tokenize_arguments(array_match.group(1)),
        )

    call_name = _trailing_call_name(text)
    if call_name is not None:
        return ArgumentExpression(
            text=text,
            kind=ArgumentKind.CHAINED_CALL,
            name=call_name,
            is_join=call_name == "join",
        )

    if _IDENTIFIER.match(text):
        return ArgumentExpression(text=text, kind=ArgumentKind.IDENTIFIER)

    return ArgumentExpression(text=text, kind=ArgumentKind.OTHER)


def tokenize_arguments(text: str) -> tuple[ArgumentExpression, ...]:
    """Split and classify an argument list in one pass over its pieces."""
    return tuple(classify_argument(piece) for piece in safe_split(text))


__all__ = [
    "ArgumentExpression",
    "ArgumentKind",
    "classify_argument",
    "safe_split",
    "tokenize_arguments",
]
