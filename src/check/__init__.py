"""Message-key checks: placeholder counts and undefined keys."""

from check.diagnostics import Diagnostic, DiagnosticKind, Severity
from check.engine import validate_placeholders, validate_placeholders_async
from check.heuristics import count_arguments
from check.placeholders import PlaceholderSet, extract_placeholders
from check.undefined_keys import find_undefined_keys

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "PlaceholderSet",
    "Severity",
    "count_arguments",
    "extract_placeholders",
    "find_undefined_keys",
    "validate_placeholders",
    "validate_placeholders_async",
]
