"""
Parser for the inside of a shortcode tag

Parses `name(key=value, ...)` starting just after an opening marker:

    tag      := identifier "(" [ argument ( "," argument )* ] ")"
    argument := identifier "=" literal
    literal  := boolean | number | string | list
    list     := "[" [ literal ( "," literal )* ] "]"

Whitespace (space, tab, newline, carriage return, form feed) may appear
between any two tokens. Strings are quoted with ", ' or `; inside them a
backslash before the quote character or another backslash yields that
character, \\n \\t \\r yield control characters, and any other backslash
sequence is kept as written.

Any violation raises TagSyntaxError. The locator catches it and treats the
opener as plain text.

Example:
    >>> tag = TagParser('{{ figure(src="a.png", width=640) }}', 3).parse()
    >>> tag.name, tag.end
    ('figure', 33)
    >>> tag.arguments["width"]
    Number(value=640)
"""

import re
from typing import Dict, Optional

from ..models.errors import TagSyntaxError
from ..models.parser import InnerTag
from ..models.values import ArgValue, Boolean, List, Number, Text

IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
NUMBER = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")
WHITESPACE = re.compile(r"[ \t\n\r\f]*")

QUOTES = ('"', "'", "`")
ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


class TagParser:
    """
    Recursive descent parser over one shortcode tag

    The parser never looks past the closing parenthesis; finding the
    `}}` / `%}` closer is the tokenizer's job.
    """

    def __init__(self, text: str, start: int = 0, settings=None):
        """
        Initialize tag parser

        Args:
            text: Full text containing the tag
            start: Character offset just after the opening marker
            settings: Optional AppSettings (max_list_depth); defaults to the singleton

        Attributes:
            position: Current character offset in text
        """
        if settings is None:
            from ..config import appsettings
            settings = appsettings
        self.text = text
        self.position = start
        self.max_list_depth = settings.max_list_depth

    def parse(self) -> InnerTag:
        """
        Parse `name(args)` from the current position

        Returns:
            InnerTag with name, ordered arguments and the offset just past `)`

        Raises:
            TagSyntaxError: On a malformed identifier, argument or literal,
                            a duplicate argument name, or unbalanced parentheses
        """
        self.whitespace_skip()
        name = self.identifier_read("shortcode name")
        self.whitespace_skip()
        self.char_expect("(")

        arguments: Dict[str, ArgValue] = {}
        self.whitespace_skip()
        if not self.char_accept(")"):
            while True:
                self.whitespace_skip()
                arg_position = self.position
                key = self.identifier_read("argument name")
                if key in arguments:
                    raise TagSyntaxError(f"Duplicate argument '{key}' in shortcode '{name}'", arg_position)
                self.whitespace_skip()
                self.char_expect("=")
                self.whitespace_skip()
                arguments[key] = self.literal_read(depth=0)
                self.whitespace_skip()
                if self.char_accept(","):
                    continue
                self.char_expect(")")
                break

        return InnerTag(name=name, arguments=arguments, end=self.position)

    def whitespace_skip(self) -> None:
        self.position = WHITESPACE.match(self.text, self.position).end()

    def char_accept(self, char: str) -> bool:
        """Consume char if it is next; report whether it was"""
        if self.text.startswith(char, self.position):
            self.position += len(char)
            return True
        return False

    def char_expect(self, char: str) -> None:
        if not self.char_accept(char):
            found = self.text[self.position:self.position + 1] or "end of input"
            raise TagSyntaxError(f"Expected '{char}' but found {found!r}", self.position)

    def identifier_read(self, what: str) -> str:
        match = IDENTIFIER.match(self.text, self.position)
        if not match:
            raise TagSyntaxError(f"Expected {what}", self.position)
        self.position = match.end()
        return match.group(0)

    def literal_read(self, depth: int) -> ArgValue:
        """
        Read one literal: boolean, number, string or list

        Args:
            depth: Current list nesting depth (0 outside any list)
        """
        if self.position >= len(self.text):
            raise TagSyntaxError("Expected a value but found end of input", self.position)

        char = self.text[self.position]
        if char in QUOTES:
            return Text(self.string_read(char))
        if char == "[":
            return self.list_read(depth + 1)

        keyword = self.keyword_read()
        if keyword is not None:
            return keyword

        match = NUMBER.match(self.text, self.position)
        if match and not self.identifierChar_at(match.end()):
            start = self.position
            self.position = match.end()
            literal = match.group(0)
            try:
                if any(c in literal for c in ".eE"):
                    return Number(float(literal))
                return Number(int(literal))
            except ValueError as e:
                # int() refuses literals past the interpreter's digit limit
                raise TagSyntaxError(f"Number literal out of range: {literal[:20]}...", start) from e

        raise TagSyntaxError(f"Invalid value starting with {char!r}", self.position)

    def keyword_read(self) -> Optional[Boolean]:
        for word, value in (("true", True), ("false", False)):
            end = self.position + len(word)
            if self.text.startswith(word, self.position) and not self.identifierChar_at(end):
                self.position = end
                return Boolean(value)
        return None

    def identifierChar_at(self, pos: int) -> bool:
        return pos < len(self.text) and (self.text[pos].isalnum() or self.text[pos] == "_")

    def string_read(self, quote: str) -> str:
        """
        Read a quoted string, resolving escapes

        Example:
            Input:  "say \\"hi\\""  (position on the opening quote)
            Output: 'say "hi"'
        """
        start = self.position
        pos = start + 1
        chunks = []

        while pos < len(self.text):
            char = self.text[pos]
            if char == quote:
                self.position = pos + 1
                return "".join(chunks)
            if char == "\\" and pos + 1 < len(self.text):
                nxt = self.text[pos + 1]
                if nxt == quote or nxt == "\\":
                    chunks.append(nxt)
                elif nxt in ESCAPES:
                    chunks.append(ESCAPES[nxt])
                else:
                    chunks.append(char + nxt)
                pos += 2
                continue
            chunks.append(char)
            pos += 1

        raise TagSyntaxError("Unterminated string", start)

    def list_read(self, depth: int) -> List:
        """Read `[literal, ...]` with the cursor on the opening bracket"""
        if depth > self.max_list_depth:
            raise TagSyntaxError(f"Lists nested deeper than {self.max_list_depth}", self.position)

        self.char_expect("[")
        items = []
        self.whitespace_skip()
        if self.char_accept("]"):
            return List(())

        while True:
            self.whitespace_skip()
            items.append(self.literal_read(depth))
            self.whitespace_skip()
            if self.char_accept(","):
                continue
            self.char_expect("]")
            return List(tuple(items))


def tag_parse(text: str, start: int = 0, settings=None) -> InnerTag:
    """Parse one tag; shorthand for TagParser(text, start, settings).parse()"""
    return TagParser(text, start, settings).parse()
