"""
Models package for shortscan

Contains data structures and type definitions for locating and rendering.
"""

from .values import ArgValue, Boolean, Number, Text, List, value_fromPython
from .span import Span, Direction, Relation
from .parser import Token, TokenKind, InnerTag, Frame
from .shortcode import Shortcode, Located
from .definitions import FileKind, ShortcodeDefinition
from .state import RenderState, pipeline
from .errors import (
    ShortscanError,
    TagSyntaxError,
    SpanUnderflowError,
    UnknownShortcodeError,
    EmbedDepthError,
)

__all__ = [
    "ArgValue",
    "Boolean",
    "Number",
    "Text",
    "List",
    "value_fromPython",
    "Span",
    "Direction",
    "Relation",
    "Token",
    "TokenKind",
    "InnerTag",
    "Frame",
    "Shortcode",
    "Located",
    "FileKind",
    "ShortcodeDefinition",
    "RenderState",
    "pipeline",
    "ShortscanError",
    "TagSyntaxError",
    "SpanUnderflowError",
    "UnknownShortcodeError",
    "EmbedDepthError",
]
