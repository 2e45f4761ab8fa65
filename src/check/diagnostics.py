"""Diagnostic records and the placeholder diagnostic emitter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from check.placeholders import PlaceholderSet

TextRange = tuple[int, int]


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class DiagnosticKind(str, Enum):
    PLACEHOLDER_COUNT_MISMATCH = "placeholder_count_mismatch"
    PLACEHOLDER_NUMBERING_INVALID = "placeholder_numbering_invalid"
    UNDEFINED_MESSAGE_KEY = "undefined_message_key"


@dataclass(frozen=True)
class Diagnostic:
    """A finding anchored at a ``(start, end)`` character range."""

    range: TextRange
    message: str
    kind: DiagnosticKind
    severity: Severity = Severity.ERROR

    def to_dict(self) -> dict[str, object]:
        return {
            "start": self.range[0],
            "end": self.range[1],
            "message": self.message,
            "severity": self.severity.value,
            "kind": self.kind.value,
        }


def count_mismatch_message(expected: int, actual: int) -> str:
    return (
        f"Placeholder count ({expected}) doesn't match provided "
        f"argument count ({actual})."
    )


def numbering_invalid_message(placeholders: PlaceholderSet) -> str:
    return (
        "Placeholders must be numbered contiguously from {0}: "
        f"found {placeholders.describe()}."
    )


def is_count_mismatch(expected: int, actual: int) -> bool:
    if expected == 0:
        return actual > 0
    return actual != expected


def emit_diagnostics(
    key_range: TextRange, placeholders: PlaceholderSet, actual_arg_count: int
) -> list[Diagnostic]:
    """Compare a call site's counts; numbering and count checks are independent."""
    diagnostics: list[Diagnostic] = []

    if not placeholders.is_well_formed:
        diagnostics.append(
            Diagnostic(
                range=key_range,
                message=numbering_invalid_message(placeholders),
                kind=DiagnosticKind.PLACEHOLDER_NUMBERING_INVALID,
            )
        )

    expected = placeholders.expected_arg_count
    if is_count_mismatch(expected, actual_arg_count):
        diagnostics.append(
            Diagnostic(
                range=key_range,
                message=count_mismatch_message(expected, actual_arg_count),
                kind=DiagnosticKind.PLACEHOLDER_COUNT_MISMATCH,
            )
        )

    return diagnostics


__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "Severity",
    "TextRange",
    "count_mismatch_message",
    "emit_diagnostics",
    "is_count_mismatch",
    "numbering_invalid_message",
]
