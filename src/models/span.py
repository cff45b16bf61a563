"""
Span models

A Span is a half-open byte range [start, end) into one specific string,
either a source string or a rewritten string, never both.
"""

from enum import Enum
from dataclasses import dataclass


class Direction(Enum):
    """Which way a span is shifted"""
    LEFT = "left"
    RIGHT = "right"


class Relation(Enum):
    """Where a byte position lies relative to a span"""
    BEFORE = "before"
    WITHIN = "within"
    AFTER = "after"


@dataclass(frozen=True)
class Span:
    """
    Half-open byte range [start, end)

    Attributes:
        start: First byte covered by the range
        end: First byte after the range

    Example:
        >>> Span(10, 20).width
        10
    """
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"Span start must be non-negative, got {self.start}")
        if self.start > self.end:
            raise ValueError(f"Span start {self.start} is past its end {self.end}")

    @property
    def width(self) -> int:
        return self.end - self.start

    def __len__(self) -> int:
        return self.width
