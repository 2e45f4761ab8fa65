"""Placeholder-argument validation pass over one source document.

A pass is a pure function of ``(text, patterns, template_lookup)``: nothing
is cached between calls and no exception escapes for malformed source.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from check.diagnostics import emit_diagnostics
from check.heuristics import count_arguments
from check.placeholders import extract_placeholders
from parse.invocations import scan_call_sites

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from check.diagnostics import Diagnostic

logger = logging.getLogger(__name__)


def validate_placeholders(
    text: str,
    patterns: Sequence[str],
    template_lookup: Callable[[str], str | None],
) -> list[Diagnostic]:
    """Check every call site's argument count against its template.

    Call sites whose key has no template (or an empty one) are skipped.
    """
    diagnostics: list[Diagnostic] = []

    for site in scan_call_sites(text, patterns):
        template = template_lookup(site.key)
        if not template:
            logger.debug("No template for key %r; skipping", site.key)
            continue

        placeholders = extract_placeholders(template)
        actual = count_arguments(placeholders.expected_arg_count, site.arguments)
        logger.debug(
            "Key %r: expected %d, actual %d",
            site.key,
            placeholders.expected_arg_count,
            actual,
        )
        diagnostics.extend(emit_diagnostics(site.key_range, placeholders, actual))

    return diagnostics


async def validate_placeholders_async(
    text: str,
    patterns: Sequence[str],
    template_lookup: Callable[[str], Awaitable[str | None]],
) -> list[Diagnostic]:
    """Resolve every referenced key first, then run the synchronous pass."""
    keys = {site.key for site in scan_call_sites(text, patterns)}
    resolved: dict[str, str | None] = {}
    for key in sorted(keys):
        resolved[key] = await template_lookup(key)
    return validate_placeholders(text, patterns, resolved.get)


__all__ = ["validate_placeholders", "validate_placeholders_async"]
