"""
Shortcode descriptor models

A Shortcode describes one top-level directive occurrence located by the
Locator. Located is the full result of one scan.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .span import Span
from .values import ArgValue


@dataclass
class Shortcode:
    """
    One located top-level shortcode

    Attributes:
        name: Shortcode name (e.g., "youtube", "quote")
        arguments: Argument name -> parsed value
        span: Byte range of this shortcode's placeholder in the rewritten
              string. Always exactly one placeholder wide.
        body: Verbatim source text between `{% name(...) %}` and `{% end %}`
              for body-carrying shortcodes, None for `{{ name(...) }}`.
              Not rewritten: nested shortcodes stay as raw text.
        source_span: Byte range of the whole occurrence in the source,
                     opener through closer (or end marker)

    Example:
        For source "{% quote(by='me') %}Hi{% end %}" with a 25 byte placeholder:
        Shortcode(
            name="quote",
            arguments={"by": Text("me")},
            span=Span(0, 25),
            body="Hi",
            source_span=Span(0, 31),
        )
    """
    name: str
    arguments: Dict[str, ArgValue] = field(default_factory=dict)
    span: Span = field(default_factory=lambda: Span(0, 0))
    body: Optional[str] = None
    source_span: Span = field(default_factory=lambda: Span(0, 0))

    def is_bodied(self) -> bool:
        return self.body is not None

    def source_text(self, source: str) -> str:
        """Original occurrence text, sliced from the source it was located in"""
        raw = source.encode("utf-8")
        return raw[self.source_span.start:self.source_span.end].decode("utf-8")


@dataclass
class Located:
    """
    Result of one Locator.locate() scan

    Unpacks as a pair: `rewritten, shortcodes = locate(source)`.

    Attributes:
        rewritten: Source with every located shortcode replaced by the placeholder
        shortcodes: Located shortcodes, in placeholder order (left to right)
    """
    rewritten: str
    shortcodes: List[Shortcode] = field(default_factory=list)

    def __iter__(self) -> Iterator:
        return iter((self.rewritten, self.shortcodes))
