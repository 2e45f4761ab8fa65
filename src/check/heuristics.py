"""Effective argument counting for message-key call sites.

The count is a lexical approximation. Array initializers are unpacked,
``.join(...)`` calls are assumed to supply whatever the template declares,
and a trailing bare identifier is treated as an exception argument under the
conditions in :func:`_drops_trailing_identifier`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from parse.arguments import ArgumentKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from parse.arguments import ArgumentExpression


def _count_non_empty(arguments: Sequence[ArgumentExpression]) -> int:
    return sum(1 for argument in arguments if not argument.is_empty)


def _count_single(expected_arg_count: int, argument: ArgumentExpression) -> int:
    if argument.kind is ArgumentKind.ARRAY_LITERAL:
        elements = argument.elements
        if len(elements) == 1 and elements[0].is_join_call:
            return expected_arg_count
        return _count_non_empty(elements)

    if argument.is_join_call:
        return expected_arg_count

    return 1


def _drops_trailing_identifier(
    expected_arg_count: int, arguments: Sequence[ArgumentExpression]
) -> bool:
    last_arg = arguments[-1]
    prev_arg = arguments[-2]

    if last_arg.kind is not ArgumentKind.IDENTIFIER:
        return False

    if prev_arg.kind is ArgumentKind.ARRAY_LITERAL:
        return True

    if prev_arg.is_join_call:
        return False

    # Also fires when one preceding arg already satisfies a single
    # placeholder, which can hide a real extra argument.
    preceding_count = len(arguments) - 1
    return preceding_count >= 2 or (
        preceding_count == 1 and expected_arg_count == 1
    )


def count_arguments(
    expected_arg_count: int, arguments: Sequence[ArgumentExpression]
) -> int:
    """Return how many substitution values a call appears to supply.

    Args:
        expected_arg_count: ``max(n) + 1`` over the template's placeholders.
        arguments: The call's arguments after the message key.
    """
    if not arguments or (len(arguments) == 1 and arguments[0].is_empty):
        return 0

    if len(arguments) == 1:
        return _count_single(expected_arg_count, arguments[0])

    remaining = list(arguments)
    if _drops_trailing_identifier(expected_arg_count, remaining):
        remaining.pop()

    return _count_non_empty(remaining)


__all__ = ["count_arguments"]
