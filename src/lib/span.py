"""
Span translation

Pure offset arithmetic for re-anchoring a previously located shortcode
after an edit elsewhere in the rewritten string, without re-scanning.

Example:
    >>> span_shift(Span(10, 20), 2, Direction.RIGHT)
    Span(start=12, end=22)
    >>> span_classify(Span(10, 20), 24)
    <Relation.AFTER: 'after'>
"""

from ..models.errors import SpanUnderflowError
from ..models.shortcode import Shortcode
from ..models.span import Direction, Relation, Span


def span_shift(span: Span, delta: int, direction: Direction) -> Span:
    """
    Move a span by delta bytes

    Args:
        span: Range to move
        delta: Non-negative distance in bytes
        direction: LEFT subtracts, RIGHT adds

    Returns:
        New Span of the same width

    Raises:
        ValueError: If delta is negative
        SpanUnderflowError: If a left shift would move start below zero
    """
    if delta < 0:
        raise ValueError(f"Shift distance must be non-negative, got {delta}")

    if direction is Direction.LEFT:
        if span.start < delta:
            raise SpanUnderflowError(f"Cannot shift {span} left by {delta}")
        return Span(span.start - delta, span.end - delta)

    return Span(span.start + delta, span.end + delta)


def span_classify(span: Span, position: int) -> Relation:
    """Classify a byte position as BEFORE, WITHIN or AFTER a span"""
    if position < span.start:
        return Relation.BEFORE
    if position >= span.end:
        return Relation.AFTER
    return Relation.WITHIN


def update_on_edit(
    shortcode: Shortcode, edit_position: int, original_length: int, new_length: int
) -> Span:
    """
    Re-anchor a shortcode's span after an edit to the rewritten string

    An edit replacing original_length bytes at edit_position with new_length
    bytes moves every span that starts after it. Spans the edit starts in
    or after are left untouched; an edit inside a placeholder leaves a
    stale span and the caller must locate again.

    Args:
        shortcode: Shortcode whose span is updated in place
        edit_position: Byte offset where the edit starts
        original_length: Bytes replaced
        new_length: Bytes written in their place

    Returns:
        The shortcode's span after the update

    Example:
        span [10, 20), edit at 2 growing 8 -> 10 bytes: [12, 22)
        span [12, 22), edit at 5 shrinking 11 -> 6 bytes: [7, 17)
    """
    if span_classify(shortcode.span, edit_position) is not Relation.BEFORE:
        return shortcode.span

    if new_length >= original_length:
        shortcode.span = span_shift(shortcode.span, new_length - original_length, Direction.RIGHT)
    else:
        shortcode.span = span_shift(shortcode.span, original_length - new_length, Direction.LEFT)

    return shortcode.span
