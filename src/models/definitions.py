"""
Shortcode definition models

Defines what a named shortcode renders to and during which pass of the
content pipeline it is rendered.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, List


class FileKind(Enum):
    """
    Which pass of the content pipeline renders a shortcode

    MARKDOWN shortcodes are rendered before Markdown is converted to HTML,
    HTML shortcodes after.
    """
    MARKDOWN = "md"
    HTML = "html"

    @classmethod
    def fromSuffix(cls, suffix: str) -> "FileKind":
        """Map a template file suffix ("md", ".html") to a FileKind"""
        cleaned = suffix.lower().lstrip(".")
        if cleaned in ("md", "markdown"):
            return cls.MARKDOWN
        if cleaned in ("html", "htm"):
            return cls.HTML
        raise ValueError(f"Unknown shortcode file kind: {suffix!r}")


@dataclass
class ShortcodeDefinition:
    """
    Definition of a named shortcode

    Attributes:
        name: Shortcode name as written in content
        file_kind: Pass during which this shortcode is rendered
        handler: Rendering function (shortcode) -> str. Receives the located
                 Shortcode with its arguments and verbatim body.
        description: Human-readable description
        aliases: Alternative names for the shortcode
    """
    name: str
    file_kind: FileKind
    handler: Callable
    description: str = ""
    aliases: List[str] = field(default_factory=list)
