"""
Insertion pass: render located shortcodes back into content

Shortcode render order over one piece of content:
1. Markdown shortcodes
2. Embedded Markdown shortcodes (found in the output of step 1)
3. Markdown -> HTML
4. HTML shortcodes
5. Embedded HTML shortcodes

Steps 1-2 and 4-5 are each one shortcodes_insert() call: locate, render
every shortcode of the pass's file kind through its definition's handler,
splice the results over the placeholders, then locate again in the output
until a pass renders nothing. Shortcodes belonging to the other pass are
put back as their original text so the later pass can find them.

Step 3 is left to a caller-supplied converter.
"""

from typing import Callable, Optional, Tuple

from ..models.definitions import FileKind, ShortcodeDefinition
from ..models.errors import EmbedDepthError, UnknownShortcodeError
from ..models.shortcode import Located, Shortcode
from ..models.state import RenderState, pipeline
from .lexer import shortcode_highlight
from .locator import locate
from .log import LOG, state_connectToLogger, state_disconnectFromLogger
from .registry import ShortcodeRegistry
from .span import update_on_edit


def shortcode_render(definition: ShortcodeDefinition, shortcode: Shortcode) -> str:
    """Run a definition's handler on one located shortcode"""
    rendered = definition.handler(shortcode)
    if not isinstance(rendered, str):
        raise TypeError(
            f"Handler for shortcode '{shortcode.name}' returned "
            f"{type(rendered).__name__}, expected str"
        )
    return rendered


def located_splice(
    located: Located, source: str, registry: ShortcodeRegistry, file_kind: FileKind
) -> str:
    """
    Replace every placeholder in a Located result

    Shortcodes are spliced left to right into the UTF-8 bytes of the
    rewritten string; after each splice the spans of the shortcodes still
    to come are re-anchored with update_on_edit.

    Args:
        located: Result of locating source
        source: The string that was located (for restoring original text)
        registry: Definitions; every shortcode name must be registered
        file_kind: Shortcodes of this kind are rendered, others restored

    Returns:
        Content with no placeholders left
    """
    buffer = bytearray(located.rewritten.encode("utf-8"))
    raw_source = source.encode("utf-8")
    shortcodes = located.shortcodes

    for index, shortcode in enumerate(shortcodes):
        definition = registry.get(shortcode.name)
        if definition.file_kind is file_kind:
            replacement = shortcode_render(definition, shortcode).encode("utf-8")
        else:
            replacement = raw_source[shortcode.source_span.start:shortcode.source_span.end]

        start, end = shortcode.span.start, shortcode.span.end
        buffer[start:end] = replacement

        for later in shortcodes[index + 1:]:
            update_on_edit(later, start, end - start, len(replacement))

    return buffer.decode("utf-8")


def passes_run(
    content: str, registry: ShortcodeRegistry, file_kind: FileKind, settings=None
) -> Tuple[str, int]:
    """
    Render shortcodes of one file kind until none are left

    Returns:
        (rendered content, number of rendering passes performed)

    Raises:
        UnknownShortcodeError: If a located shortcode is not registered
        EmbedDepthError: If content still holds shortcodes of this kind
                         after settings.max_embed_passes rendering passes
    """
    if settings is None:
        from ..config import appsettings
        settings = appsettings

    depth = 0
    while True:
        located = locate(content, settings)

        for shortcode in located.shortcodes:
            if shortcode.name not in registry:
                raise UnknownShortcodeError(shortcode.name)

        pending = [
            shortcode for shortcode in located.shortcodes
            if registry.get(shortcode.name).file_kind is file_kind
        ]
        if not pending:
            return content, depth

        if depth == settings.max_embed_passes:
            raise EmbedDepthError(
                f"{file_kind.name} shortcodes still present after "
                f"{settings.max_embed_passes} passes: "
                f"{', '.join(sorted({sc.name for sc in pending}))}"
            )

        LOG(f"{file_kind.name} pass {depth + 1}: rendering {len(pending)} shortcodes", level=2)
        if settings.debug_mode:
            for shortcode in pending:
                LOG(shortcode_highlight(shortcode.source_text(content)).rstrip("\n"), level=3)
        content = located_splice(located, content, registry, file_kind)
        depth += 1


def shortcodes_insert(
    source: str, registry: ShortcodeRegistry, file_kind: FileKind, settings=None
) -> str:
    """
    Render all shortcodes of one file kind in source, embedded ones included

    Example:
        >>> registry = ShortcodeRegistry()
        >>> _ = registry.shortcode_add("year", FileKind.MARKDOWN, lambda sc: "2024")
        >>> shortcodes_insert("(c) {{ year() }}", registry, FileKind.MARKDOWN)
        '(c) 2024'
    """
    content, _ = passes_run(source, registry, file_kind, settings)
    return content


def markdown_insert(inputstate: RenderState) -> RenderState:
    """Render Markdown shortcodes (steps 1-2)"""
    state = inputstate.copy()
    LOG("Rendering Markdown shortcodes...", level=1)
    state.content, passes = passes_run(state.content, state.registry, FileKind.MARKDOWN, state.settings)
    state.fileKind = FileKind.MARKDOWN
    state.passes += passes
    return state


def markdown_convert(inputstate: RenderState) -> RenderState:
    """Convert Markdown to HTML with the caller's converter (step 3)"""
    state = inputstate.copy()
    if state.markdownConvert is not None:
        LOG("Converting Markdown to HTML...", level=1)
        state.content = state.markdownConvert(state.content)
    return state


def html_insert(inputstate: RenderState) -> RenderState:
    """Render HTML shortcodes (steps 4-5)"""
    state = inputstate.copy()
    LOG("Rendering HTML shortcodes...", level=1)
    state.content, passes = passes_run(state.content, state.registry, FileKind.HTML, state.settings)
    state.fileKind = FileKind.HTML
    state.passes += passes
    return state


def content_render(
    content: str,
    registry: ShortcodeRegistry,
    markdown_convert_fn: Optional[Callable[[str], str]] = None,
    verbosity: int = 1,
    settings=None,
) -> RenderState:
    """
    Run the full shortcode render pipeline over one piece of content

    Args:
        content: Markdown source
        registry: Shortcode definitions
        markdown_convert_fn: Markdown to HTML converter; content is passed
                             through unchanged when None
        verbosity: Logging verbosity for this render
        settings: Optional AppSettings override

    Returns:
        Final RenderState; its content is the rendered HTML
    """
    state = RenderState(
        content=content,
        registry=registry,
        markdownConvert=markdown_convert_fn,
        verbosity=verbosity,
        settings=settings,
    )
    token = state_connectToLogger(state)
    try:
        return pipeline(state, markdown_insert, markdown_convert, html_insert)
    finally:
        state_disconnectFromLogger(token)
