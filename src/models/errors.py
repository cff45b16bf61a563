"""
Exception hierarchy for shortscan

The locating engine itself is total over string input: TagSyntaxError is
raised by the tag parser and always absorbed by the locator. The remaining
exceptions belong to span arithmetic and to the insertion pass.
"""


class ShortscanError(Exception):
    """Base class for all shortscan errors"""
    pass


class TagSyntaxError(ShortscanError, SyntaxError):
    """
    Raised when the inside of a shortcode tag cannot be parsed

    Attributes:
        position: Offset into the scanned text where parsing failed
    """

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} (at offset {position})")
        self.position = position


class SpanUnderflowError(ShortscanError, ValueError):
    """Raised when shifting a span left would produce a negative offset"""
    pass


class UnknownShortcodeError(ShortscanError, KeyError):
    """Raised when a located shortcode has no registered definition"""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Found usage of a shortcode named '{self.name}' but it is not defined"


class EmbedDepthError(ShortscanError, RuntimeError):
    """Raised when rendered shortcodes keep producing new shortcodes"""
    pass
