"""
Parser-specific data models

Type-safe structures for tokenizer and tag parser return values, and the
transient nesting frame used by the locator.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, Tuple

from .values import ArgValue


class TokenKind(Enum):
    """
    Marker classes recognised by the tokenizer

    In opener mode all three kinds can be produced; in closer mode only
    BODY (`%}`) and NORMAL (`}}`).
    """
    END = "end"          # {% end %}
    BODY = "body"        # {%  ...  %}
    NORMAL = "normal"    # {{  ...  }}


@dataclass(frozen=True)
class Token:
    """
    A marker located by the tokenizer

    Attributes:
        kind: Marker class
        start: Character offset of the first character of the marker
        end: Character offset just past the marker (includes any whitespace
             the marker swallows)

    Example:
        For source "ab{{ x() }}" opener mode at 0:
        Token(kind=TokenKind.NORMAL, start=2, end=5)
    """
    kind: TokenKind
    start: int
    end: int

    @property
    def span(self) -> Tuple[int, int]:
        return (self.start, self.end)


@dataclass
class InnerTag:
    """
    Result of parsing the inside of a shortcode tag

    Returned by TagParser.parse() for text like `name(key=value, ...)`.

    Attributes:
        name: Shortcode name
        arguments: Argument name -> value, in the order written
        end: Character offset immediately after the closing parenthesis,
             where the tokenizer resumes in closer mode
    """
    name: str
    arguments: Dict[str, ArgValue] = field(default_factory=dict)
    end: int = 0


@dataclass
class Frame:
    """
    An open body-carrying shortcode awaiting its end marker

    Attributes:
        name: Shortcode name
        arguments: Parsed arguments
        anchor: Byte offset in the output where its placeholder was written
        piece_index: Number of output pieces written before the placeholder
        opener_start: Character offset of the `{%` opener in the source
        opener_end: Character offset just after the `{%` opener token
        opener_byte: UTF-8 byte offset of the opener in the source
        body_start: Character offset in the source where the body begins
    """
    name: str
    arguments: Dict[str, ArgValue]
    anchor: int
    piece_index: int
    opener_start: int
    opener_end: int
    opener_byte: int
    body_start: int
