"""Positional ``{n}`` placeholder extraction for message templates."""

from __future__ import annotations

import re
from dataclasses import dataclass

_PLACEHOLDER = re.compile(r"\{(\d+)\}")


@dataclass(frozen=True)
class PlaceholderSet:
    """Distinct placeholder indices referenced by a template, ascending."""

    indices: tuple[int, ...] = ()

    @property
    def expected_arg_count(self) -> int:
        return self.indices[-1] + 1 if self.indices else 0

    @property
    def is_well_formed(self) -> bool:
        """True when empty or exactly ``{0..k}``."""
        return all(position == index for position, index in enumerate(self.indices))

    def describe(self) -> str:
        return ", ".join(f"{{{index}}}" for index in self.indices)


def _is_escaped(template: str, brace_offset: int) -> bool:
    """A brace is escaped when preceded by an odd run of backslashes."""
    run = 0
    cursor = brace_offset - 1
    while cursor >= 0 and template[cursor] == "\\":
        run += 1
        cursor -= 1
    return run % 2 == 1


def extract_placeholders(template: str) -> PlaceholderSet:
    """Collect the ``{n}`` indices of ``template``, skipping ``\\{n\\}``."""
    indices = {
        int(match.group(1))
        for match in _PLACEHOLDER.finditer(template)
        if not _is_escaped(template, match.start())
    }
    return PlaceholderSet(indices=tuple(sorted(indices)))


__all__ = ["PlaceholderSet", "extract_placeholders"]
