"""
Shared fixtures for shortscan tests
"""

import pytest

from shortscan.config import AppSettings
from shortscan.lib.registry import ShortcodeRegistry
from shortscan.models.definitions import FileKind

PLACEHOLDER = "@@SHORTCODE_PLACEHOLDER@@"


@pytest.fixture
def settings():
    """Default settings, independent of the environment"""
    return AppSettings(_env_file=None, placeholder=PLACEHOLDER)


@pytest.fixture
def placeholder(settings):
    return settings.placeholder


@pytest.fixture
def width(settings):
    return settings.placeHolder_width()


@pytest.fixture
def registry():
    """Registry with a few Markdown and HTML shortcodes"""
    registry = ShortcodeRegistry()
    registry.shortcode_add(
        "year", FileKind.MARKDOWN, lambda sc: "2024"
    )
    registry.shortcode_add(
        "bold", FileKind.MARKDOWN, lambda sc: f"**{sc.body}**"
    )
    registry.shortcode_add(
        "greet", FileKind.MARKDOWN, lambda sc: f"Hello, {sc.arguments['who'].python()}!"
    )
    registry.shortcode_add(
        "hr", FileKind.HTML, lambda sc: "<hr>"
    )
    registry.shortcode_add(
        "div", FileKind.HTML, lambda sc: f'<div class="{sc.arguments["cls"].python()}">{sc.body}</div>'
    )
    return registry
