"""
Render state model and pipeline helper

Defines RenderState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from typing import Callable, Optional, TypeVar, TYPE_CHECKING
from dataclasses import dataclass, field

from .definitions import FileKind

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from ..lib.registry import ShortcodeRegistry
    from ..config.settings import AppSettings


RS = TypeVar("RS", bound="RenderState")


@dataclass
class RenderState:
    """
    Central state container for the content render pipeline (state bus pattern).

    This dataclass carries the content through the pipeline, each stage
    replacing `content` with its output.

    Pipeline stages and their state changes:
        - Initial: content, registry, markdownConvert, verbosity
        - markdown_insert: content (Markdown shortcodes rendered), fileKind
        - markdown_convert: content (now HTML)
        - html_insert: content (HTML shortcodes rendered), fileKind

    Attributes:
        content: Text being rendered
        registry: Shortcode definitions consulted by the insert stages
        markdownConvert: Markdown to HTML converter, identity when None
        verbosity: Logging verbosity level (0-3)
        settings: Optional AppSettings override
        fileKind: File kind of the last insert stage run
        passes: Number of locate passes performed so far
    """

    content: str = field(default="")
    registry: Optional["ShortcodeRegistry"] = field(default=None)
    markdownConvert: Optional[Callable[[str], str]] = field(default=None)
    verbosity: int = field(default=1)
    settings: Optional["AppSettings"] = field(default=None)

    # Pipeline state
    fileKind: FileKind = field(default=FileKind.MARKDOWN)
    passes: int = field(default=0)

    def copy(self: RS) -> RS:
        """
        Creates a shallow copy of the RenderState instance.

        Returns:
            A new RenderState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: RenderState, *stages: Callable[[RenderState], RenderState]
) -> RenderState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (RenderState) -> RenderState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting RenderState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final RenderState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            markdown_insert,
            markdown_convert,
            html_insert,
        )

    This is equivalent to:
        html_insert(markdown_convert(markdown_insert(initial_state)))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
