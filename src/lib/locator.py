"""
Locator for {{ shortcode() }} and {% shortcode() %}...{% end %} syntax

Finds every top-level shortcode in a Markdown or HTML source string,
replaces each with a fixed-width placeholder and returns the rewritten
string together with one Shortcode per placeholder.

The locator operates in a single left-to-right pass:
1. Tokenizer (opener mode) finds the next `{{`, `{%` or `{% end %}`
2. TagParser consumes `name(args)`, tokenizer (closer mode) checks the closer
3. Source text is copied to the output, shortcodes become placeholders

Key features:
- Explicit frame stack for body-carrying shortcodes, no recursion
- Shortcodes inside a body are left untouched as raw body text; locate the
  body again to find them (the embedded pass)
- Malformed tags and mismatched delimiters stay as literal text
- Spans are UTF-8 byte offsets, so placeholders are all equally wide

Example:
    >>> located = locate("Hi {{ wave(times=2) }}!")
    >>> located.rewritten
    'Hi @@SHORTCODE_PLACEHOLDER@@!'
    >>> located.shortcodes[0].span
    Span(start=3, end=28)
"""

from typing import List

from ..models.errors import TagSyntaxError
from ..models.parser import Frame, Token, TokenKind
from ..models.shortcode import Located, Shortcode
from ..models.span import Span
from .log import LOG
from .tag import TagParser
from .tokenizer import closer_at, opener_next


class Locator:
    """
    Locator for one source string

    Handles:
    - Self-closing shortcodes: {{ name(args) }}
    - Body-carrying shortcodes: {% name(args) %}body{% end %}
    - Spurious `{% end %}` markers (kept as text)
    - Unterminated bodies (opener kept as text, the rest scanned again)

    Each call to locate() rescans from scratch; no state survives between
    calls.
    """

    def __init__(self, source: str, settings=None):
        """
        Initialize locator with source text

        Args:
            source: Markdown or HTML text to scan
            settings: Optional AppSettings; defaults to the singleton

        Attributes:
            source: Source text being scanned
            position: Character offset where the next opener search starts
            copied: Character offset up to which source has been copied to output
            pieces: Output chunks, joined at the end of the scan
            output_bytes: UTF-8 length of everything in pieces
            stack: Open body-carrying shortcodes
            shortcodes: Completed shortcodes, in placeholder order
        """
        if settings is None:
            from ..config import appsettings
            settings = appsettings
        self.settings = settings
        self.source = source
        self.placeholder = settings.placeholder
        self.placeholder_width = settings.placeHolder_width()
        self.ascii_only = source.isascii()
        self.reset()

    def reset(self) -> None:
        self.position = 0
        self.copied = 0
        self.pieces: List[str] = []
        self.output_bytes = 0
        self.stack: List[Frame] = []
        self.shortcodes: List[Shortcode] = []
        self.byte_cursor = (0, 0)

    def locate(self) -> Located:
        """
        Locate all top-level shortcodes and rewrite the source

        Never raises for any string input. A body still open at end of input
        is dropped: its opener is kept as text and scanning resumes right
        after it, so shortcodes following the opener are still found.

        Returns:
            Located with the rewritten string and the shortcodes whose
            placeholders appear in it, left to right
        """
        self.reset()

        while True:
            token = opener_next(self.source, self.position)
            if token is None:
                if not self.stack:
                    break
                self.unterminated_restore()
                continue

            if token.kind is TokenKind.END:
                self.endMarker_handle(token)
            elif self.stack:
                # Inside a body: opaque until the body closes
                self.position = token.end
            else:
                self.opener_attempt(token)

        self.text_copy(len(self.source))

        LOG(f"Located {len(self.shortcodes)} shortcodes in {len(self.source)} characters", level=2)
        return Located(rewritten="".join(self.pieces), shortcodes=self.shortcodes)

    def endMarker_handle(self, token: Token) -> None:
        """
        Close the innermost open body, or skip a spurious end marker

        A spurious marker is not consumed: it is copied with the surrounding
        text on the next copy step.
        """
        self.position = token.end
        if not self.stack:
            LOG(f"Ignoring end marker without open body at offset {token.start}", level=3)
            return

        frame = self.stack.pop()
        shortcode = Shortcode(
            name=frame.name,
            arguments=frame.arguments,
            span=Span(frame.anchor, frame.anchor + self.placeholder_width),
            body=self.source[frame.body_start:token.start],
            source_span=Span(frame.opener_byte, self.byteOffset_of(token.end)),
        )
        self.shortcodes.append(shortcode)
        LOG(f"Closed body of '{frame.name}' at offset {token.start}", level=3)

        if not self.stack:
            self.copied = token.end

    def opener_attempt(self, token: Token) -> None:
        """
        Try to parse a shortcode at an opener

        On a tag parse failure, a missing closer or a closer of the other
        style, scanning resumes right after the opener and the opener text
        is left to be copied verbatim.
        """
        try:
            tag = TagParser(self.source, token.end, self.settings).parse()
        except TagSyntaxError as e:
            LOG(f"Not a shortcode at offset {token.start}: {e}", level=3)
            self.position = token.end
            return

        closer = closer_at(self.source, tag.end)
        if closer is None or closer.kind is not token.kind:
            LOG(f"Mismatched or missing closer for '{tag.name}' at offset {token.start}", level=3)
            self.position = token.end
            return

        self.text_copy(token.start)
        piece_index = len(self.pieces)
        anchor = self.placeholder_write()

        if token.kind is TokenKind.NORMAL:
            self.shortcodes.append(Shortcode(
                name=tag.name,
                arguments=tag.arguments,
                span=Span(anchor, anchor + self.placeholder_width),
                body=None,
                source_span=Span(self.byteOffset_of(token.start), self.byteOffset_of(closer.end)),
            ))
            LOG(f"Found shortcode '{tag.name}' at offset {token.start}", level=3)
        else:
            self.stack.append(Frame(
                name=tag.name,
                arguments=tag.arguments,
                anchor=anchor,
                piece_index=piece_index,
                opener_start=token.start,
                opener_end=token.end,
                opener_byte=self.byteOffset_of(token.start),
                body_start=closer.end,
            ))
            LOG(f"Opened body of '{tag.name}' at offset {token.start}", level=3)

        self.copied = closer.end
        self.position = closer.end

    def unterminated_restore(self) -> None:
        """
        Undo the placeholder of a body that never saw its end marker

        Nothing is written to the output while a body is open, so dropping
        the pieces from the outermost frame's placeholder on and copying
        again from its opener restores the literal text. The scan then
        resumes just after the opener, as for any other failed attempt.
        """
        frame = self.stack[0]
        LOG(f"Unterminated body of '{frame.name}' at offset {frame.opener_start}, keeping it as text", level=2)
        del self.pieces[frame.piece_index:]
        self.output_bytes = frame.anchor
        self.copied = frame.opener_start
        self.position = frame.opener_end
        self.stack.clear()

    def text_copy(self, upto: int) -> None:
        """Copy source[copied:upto] to the output"""
        if upto <= self.copied:
            return
        chunk = self.source[self.copied:upto]
        self.pieces.append(chunk)
        self.output_bytes += len(chunk) if self.ascii_only else len(chunk.encode("utf-8"))
        self.copied = upto

    def placeholder_write(self) -> int:
        """Append the placeholder; return its byte offset in the output"""
        anchor = self.output_bytes
        self.pieces.append(self.placeholder)
        self.output_bytes += self.placeholder_width
        return anchor

    def byteOffset_of(self, pos: int) -> int:
        """
        Convert a character offset in source to a UTF-8 byte offset

        Offsets are requested in increasing order, so the last conversion
        is remembered and the next one only encodes the gap.
        """
        if self.ascii_only:
            return pos

        char_base, byte_base = self.byte_cursor
        if pos < char_base:
            char_base, byte_base = 0, 0
        byte_pos = byte_base + len(self.source[char_base:pos].encode("utf-8"))
        self.byte_cursor = (pos, byte_pos)
        return byte_pos


def locate(source: str, settings=None) -> Located:
    """
    Locate all top-level shortcodes in source

    Shorthand for Locator(source, settings).locate().

    Example:
        >>> rewritten, shortcodes = locate("{% note() %}Careful{% end %}")
        >>> shortcodes[0].body
        'Careful'
    """
    return Locator(source, settings).locate()
