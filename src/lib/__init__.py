"""
shortscan library: tokenizer, tag parser, locator, span translation and
the insertion pass built on them.
"""

from .log import LOG, state_connectToLogger, state_disconnectFromLogger
from .tokenizer import opener_next, closer_at
from .tag import TagParser, tag_parse
from .span import span_shift, span_classify, update_on_edit
from .locator import Locator, locate
from .registry import ShortcodeRegistry
from .insert import shortcodes_insert, content_render
from .lexer import ShortcodeLexer, shortcode_highlight

__all__ = [
    "LOG",
    "state_connectToLogger",
    "state_disconnectFromLogger",
    "opener_next",
    "closer_at",
    "TagParser",
    "tag_parse",
    "span_shift",
    "span_classify",
    "update_on_edit",
    "Locator",
    "locate",
    "ShortcodeRegistry",
    "shortcodes_insert",
    "content_render",
    "ShortcodeLexer",
    "shortcode_highlight",
]
