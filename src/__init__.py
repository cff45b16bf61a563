"""
shortscan - Shortcode locating engine for static-site content

Finds {{ name(args) }} and {% name(args) %}...{% end %} shortcodes in
Markdown or HTML, swaps them for fixed-width placeholders and hands back
typed descriptors for a rendering pass.
"""

__version__ = "1.0.0"

from .lib import (
    Locator,
    locate,
    TagParser,
    ShortcodeRegistry,
    shortcodes_insert,
    content_render,
    span_shift,
    span_classify,
    update_on_edit,
    LOG,
    state_connectToLogger,
)
from .models import (
    Shortcode,
    Located,
    Span,
    Direction,
    Relation,
    FileKind,
    ShortcodeDefinition,
    Boolean,
    Number,
    Text,
    List,
)

__all__ = [
    "Locator",
    "locate",
    "TagParser",
    "ShortcodeRegistry",
    "shortcodes_insert",
    "content_render",
    "span_shift",
    "span_classify",
    "update_on_edit",
    "LOG",
    "state_connectToLogger",
    "Shortcode",
    "Located",
    "Span",
    "Direction",
    "Relation",
    "FileKind",
    "ShortcodeDefinition",
    "Boolean",
    "Number",
    "Text",
    "List",
    "__version__",
]
