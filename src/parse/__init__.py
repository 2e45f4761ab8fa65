"""Lexical call-site and argument parsing."""

from parse.arguments import (
    ArgumentExpression,
    ArgumentKind,
    classify_argument,
    safe_split,
    tokenize_arguments,
)
from parse.invocations import (
    ArgumentList,
    CallSite,
    Invocation,
    compile_invocation_pattern,
    extract_argument_list,
    find_invocations,
    scan_call_sites,
)

__all__ = [
    "ArgumentExpression",
    "ArgumentKind",
    "ArgumentList",
    "CallSite",
    "Invocation",
    "classify_argument",
    "compile_invocation_pattern",
    "extract_argument_list",
    "find_invocations",
    "safe_split",
    "scan_call_sites",
    "tokenize_arguments",
]
