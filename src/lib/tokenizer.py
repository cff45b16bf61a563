"""
Two-stage tokenizer for shortcode markers

Stage one (opener mode) scans forward over raw text for the next opening
marker. Stage two (closer mode) runs only after the tag parser has consumed
`name(args)` and checks for a closing marker right where the parser stopped.

Splitting the work this way keeps whitespace inside an argument list from
being confused with whitespace before the closing delimiter.

Example:
    >>> opener_next("Hi {{ youtube(id=1) }}", 0)
    Token(kind=<TokenKind.NORMAL: 'normal'>, start=3, end=6)
    >>> closer_at("Hi {{ youtube(id=1) }}", 19)
    Token(kind=<TokenKind.NORMAL: 'normal'>, start=19, end=22)
"""

import re
from typing import Optional

from ..models.parser import Token, TokenKind

# Whitespace allowed around markers
WS = r"[ \t\n\f]*"

# Alternation order is the precedence: an end marker wins over a plain body opener
OPENER_PATTERN = re.compile(
    r"(?P<end>\{%" + WS + r"[eE][nN][dD]" + WS + r"%\})"
    r"|(?P<body>\{%" + WS + r")"
    r"|(?P<normal>\{\{" + WS + r")"
)

CLOSER_PATTERN = re.compile(
    r"(?P<body>" + WS + r"%\})"
    r"|(?P<normal>" + WS + r"\}\})"
)

_KINDS = {
    "end": TokenKind.END,
    "body": TokenKind.BODY,
    "normal": TokenKind.NORMAL,
}


def opener_next(text: str, pos: int) -> Optional[Token]:
    """
    Find the next opening marker at or after pos

    Any text that is not a marker, including a lone `{`, is skipped.

    Args:
        text: Text being scanned
        pos: Character offset to start scanning from

    Returns:
        Token for the leftmost `{% end %}`, `{%` or `{{` marker, or None at
        end of input
    """
    match = OPENER_PATTERN.search(text, pos)
    if not match:
        return None
    return Token(kind=_KINDS[match.lastgroup], start=match.start(), end=match.end())


def closer_at(text: str, pos: int) -> Optional[Token]:
    """
    Match a closing marker starting exactly at pos

    Only optional whitespace may precede the `%}` or `}}`. Anything else
    means there is no closer here and the caller abandons the attempt.

    Returns:
        Token of kind BODY or NORMAL, or None
    """
    match = CLOSER_PATTERN.match(text, pos)
    if not match:
        return None
    return Token(kind=_KINDS[match.lastgroup], start=match.start(), end=match.end())
