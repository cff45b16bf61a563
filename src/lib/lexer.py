"""
Custom Pygments lexer for shortcode syntax highlighting

Highlights {{ name(args) }} and {% name(args) %} ... {% end %} markup
inside Markdown or HTML, for diagnostics and documentation.

Token types:
- Keyword: The `{% end %}` marker
- Name.Tag: Shortcode names
- Punctuation: Markers, parentheses, brackets and commas
- Name.Attribute: Argument names
- Keyword.Constant / Number / String: Literal argument values
- Text: Everything outside a tag
"""

from typing import Any, Optional

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Keyword,
    Number,
    Operator,
    Error,
)


class ShortcodeLexer(RegexLexer):
    """
    Lexer for content carrying shortcodes

    Example:
        {{ youtube(id="dQw4w9WgXcQ", autoplay=true) }}

    Tokens:
        {{ → Punctuation
        youtube → Name.Tag
        id → Name.Attribute
        "dQw4w9WgXcQ" → String.Double
        true → Keyword.Constant
        }} → Punctuation
    """

    name = 'Shortcode'
    aliases = ['shortcode', 'shortcodes']
    filenames = []

    tokens = {
        'root': [
            # End marker
            (r'\{%[ \t\n\f]*[eE][nN][dD][ \t\n\f]*%\}', Keyword),

            # Body and normal openers followed by a name
            (r'(\{%|\{\{)([ \t\n\f]*)([A-Za-z_]\w*)([ \t\n\r\f]*)(\()',
             bygroups(Punctuation, Text, Name.Tag, Text, Punctuation), 'arguments'),

            # Everything else is text
            (r'[^{]+', Text),
            (r'\{', Text),
        ],

        'arguments': [
            # Closing parenthesis and closer
            (r'(\))([ \t\n\f]*)(\}\}|%\})', bygroups(Punctuation, Text, Punctuation), '#pop'),
            (r'\)', Punctuation, '#pop'),

            (r'[ \t\n\r\f]+', Text),
            (r'([A-Za-z_]\w*)([ \t\n\r\f]*)(=)', bygroups(Name.Attribute, Text, Operator)),
            (r'[,\[\]]', Punctuation),

            (r'(true|false)\b', Keyword.Constant),
            (r'[+-]?(\d+\.\d*|\.\d+)([eE][+-]?\d+)?', Number.Float),
            (r'[+-]?\d+[eE][+-]?\d+', Number.Float),
            (r'[+-]?\d+', Number.Integer),

            (r'"(\\\\|\\"|[^"\\]|\\[^"\\])*"', String.Double),
            (r"'(\\\\|\\'|[^'\\]|\\[^'\\])*'", String.Single),
            (r'`(\\\\|\\`|[^`\\]|\\[^`\\])*`', String.Backtick),

            # Anything else breaks the tag
            (r'.', Error, '#pop'),
        ],
    }


def get_lexer() -> ShortcodeLexer:
    """
    Get the ShortcodeLexer instance

    Returns:
        ShortcodeLexer instance ready for use with Pygments
    """
    return ShortcodeLexer()


def shortcode_highlight(text: str, formatter: Optional[Any] = None) -> str:
    """
    Highlight shortcode markup

    Args:
        text: Markup to highlight
        formatter: Any Pygments formatter; TerminalFormatter when None

    Returns:
        Highlighted text as produced by the formatter
    """
    return highlight(text, get_lexer(), formatter or TerminalFormatter())
