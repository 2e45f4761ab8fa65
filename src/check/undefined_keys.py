"""Detection of message keys that no catalog entry defines."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from check.diagnostics import Diagnostic, DiagnosticKind, Severity

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

BUILTIN_METHOD_PATTERNS = ("messageSource.getMessage",)


def compile_key_patterns(
    method_patterns: Iterable[str], annotation_patterns: Iterable[str] = ()
) -> list[re.Pattern[str]]:
    """Build key matchers; group 1 of every matcher is the key literal.

    Method names match ``[receiver.]name("key"``. Annotation patterns are
    used verbatim as regular expressions.
    """
    compiled: list[re.Pattern[str]] = []
    for method in [*method_patterns, *BUILTIN_METHOD_PATTERNS]:
        if not method:
            continue
        compiled.append(
            re.compile(rf"""(?:[\w$]+\.)?{re.escape(method)}\(\s*['"]([^'"]+)['"]""")
        )
    for pattern in annotation_patterns:
        annotation = re.compile(pattern)
        if annotation.groups < 1:
            msg = f"Annotation pattern {pattern!r} must capture the key in group 1"
            raise ValueError(msg)
        compiled.append(annotation)
    return compiled


def find_undefined_keys(
    text: str,
    method_patterns: Iterable[str],
    annotation_patterns: Iterable[str],
    is_defined: Callable[[str], bool],
) -> list[Diagnostic]:
    """Report each referenced key that ``is_defined`` rejects."""
    diagnostics: list[Diagnostic] = []

    for pattern in compile_key_patterns(method_patterns, annotation_patterns):
        for match in pattern.finditer(text):
            raw_key = match.group(1)
            if raw_key is None:
                continue
            key = raw_key.strip()
            if not key or is_defined(key):
                continue

            start = match.start(1) + raw_key.index(key)
            logger.debug("Undefined key %r at offset %d", key, start)
            diagnostics.append(
                Diagnostic(
                    range=(start, start + len(key)),
                    message=f"Undefined message key: '{key}'",
                    kind=DiagnosticKind.UNDEFINED_MESSAGE_KEY,
                    severity=Severity.WARNING,
                )
            )

    return diagnostics


__all__ = ["BUILTIN_METHOD_PATTERNS", "compile_key_patterns", "find_undefined_keys"]
