"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the verbosity of the
state connected to the current context without requiring explicit state
passing through the locator and insertion code.

Usage:
    from shortscan.lib.log import LOG, state_connectToLogger

    # At start of a render pipeline:
    state_connectToLogger(state)

    # Anywhere in that context:
    LOG("Rendering Markdown shortcodes", level=1)
    LOG("Located 3 shortcodes", level=2)
    LOG("Opener {% at offset 1337", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar, Token
import sys

# Context variable to hold the connected state
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> Token:
    """
    Connect a state object to the logging context.

    Any object with a `verbosity` attribute works (RenderState, argparse
    Namespace, ...). Pass None to disconnect. Returns a token for
    state_disconnectFromLogger().
    """
    return _program_state.set(state)


def state_disconnectFromLogger(token: Token) -> None:
    """Restore whatever state was connected before state_connectToLogger()"""
    _program_state.reset(token)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Without a connected state nothing is logged.
    """
    state = _program_state.get()

    if state is not None and getattr(state, 'verbosity', 0) >= level:
        logger.opt(depth=1).debug(message, **kwargs)
