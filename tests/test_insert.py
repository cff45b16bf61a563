"""
Insertion pass tests - rendering located shortcodes back into content

Tests splicing with span re-anchoring, the per-file-kind passes, the
embedded pass and the full render pipeline.
"""

import pytest

from shortscan.config import AppSettings
from shortscan.lib.insert import content_render, located_splice, shortcodes_insert
from shortscan.lib.locator import locate
from shortscan.lib.registry import ShortcodeRegistry
from shortscan.models.definitions import FileKind, ShortcodeDefinition
from shortscan.models.errors import EmbedDepthError, UnknownShortcodeError


class TestRegistry:
    """Test ShortcodeRegistry"""

    def test_lookup(self, registry):
        """Registered names resolve, others do not"""
        assert registry.get("year").file_kind is FileKind.MARKDOWN
        assert registry.get("missing") is None
        assert "hr" in registry
        assert "missing" not in registry

    def test_aliases(self):
        """Aliases resolve to the same definition"""
        definition = ShortcodeDefinition(
            name="youtube", file_kind=FileKind.HTML, handler=lambda sc: "", aliases=["yt"]
        )
        registry = ShortcodeRegistry([definition])
        assert registry.get("yt") is definition
        assert registry.names() == ["youtube", "yt"]
        assert registry.definitions_listByKind(FileKind.HTML) == [definition]

    def test_list_by_kind(self, registry):
        """Definitions are grouped by the pass that renders them"""
        names = {d.name for d in registry.definitions_listByKind(FileKind.HTML)}
        assert names == {"hr", "div"}

    def test_file_kind_from_suffix(self):
        """Template suffixes map to file kinds"""
        assert FileKind.fromSuffix(".md") is FileKind.MARKDOWN
        assert FileKind.fromSuffix("HTML") is FileKind.HTML
        with pytest.raises(ValueError):
            FileKind.fromSuffix("txt")


class TestSplice:
    """Test located_splice"""

    def test_replacements_of_different_lengths(self, registry, settings):
        """Later spans are re-anchored after each splice"""
        source = "{{ year() }} / {{ greet(who='Ann') }} / {{ year() }}"
        located = locate(source, settings)
        assert located_splice(located, source, registry, FileKind.MARKDOWN) == \
            "2024 / Hello, Ann! / 2024"

    def test_other_kind_restored(self, registry, settings):
        """Shortcodes of the other pass go back to their source text"""
        source = "{{ year() }} {{ hr() }} {% bold() %}b{% end %}"
        located = locate(source, settings)
        assert located_splice(located, source, registry, FileKind.MARKDOWN) == \
            "2024 {{ hr() }} **b**"

    def test_multibyte_content(self, registry, settings):
        """Splicing works in bytes around multibyte text"""
        source = "ö {{ greet(who='Zoë') }} ü {{ year() }} é"
        located = locate(source, settings)
        assert located_splice(located, source, registry, FileKind.MARKDOWN) == \
            "ö Hello, Zoë! ü 2024 é"


class TestShortcodesInsert:
    """Test shortcodes_insert"""

    def test_plain_text(self, registry, settings):
        """Content without shortcodes is unchanged"""
        assert shortcodes_insert("no codes", registry, FileKind.MARKDOWN, settings) == "no codes"

    def test_unknown_shortcode(self, registry, settings):
        """An undefined shortcode is a hard failure"""
        with pytest.raises(UnknownShortcodeError, match="'nope'"):
            shortcodes_insert("{{ nope() }}", registry, FileKind.MARKDOWN, settings)

    def test_embedded_shortcodes_rendered(self, registry, settings):
        """Shortcodes in a rendered body are rendered by the embedded pass"""
        source = "{% bold() %}(c) {{ year() }}{% end %}"
        assert shortcodes_insert(source, registry, FileKind.MARKDOWN, settings) == "**(c) 2024**"

    def test_html_pass_leaves_markdown_kind(self, registry, settings):
        """The HTML pass restores Markdown shortcodes untouched"""
        source = "{{ hr() }}{{ year() }}"
        assert shortcodes_insert(source, registry, FileKind.HTML, settings) == "<hr>{{ year() }}"

    def test_runaway_embedding(self, settings):
        """A shortcode that renders itself forever is stopped"""
        registry = ShortcodeRegistry()
        registry.shortcode_add("loop", FileKind.MARKDOWN, lambda sc: "{{ loop() }}")
        limited = AppSettings(_env_file=None, placeholder=settings.placeholder, max_embed_passes=3)

        with pytest.raises(EmbedDepthError, match="loop"):
            shortcodes_insert("{{ loop() }}", registry, FileKind.MARKDOWN, limited)

    def test_handler_must_return_text(self, settings):
        """Handlers returning non-strings are rejected"""
        registry = ShortcodeRegistry()
        registry.shortcode_add("num", FileKind.MARKDOWN, lambda sc: 42)
        with pytest.raises(TypeError, match="num"):
            shortcodes_insert("{{ num() }}", registry, FileKind.MARKDOWN, settings)

    def test_handler_sees_arguments_and_body(self, settings):
        """Handlers receive the located Shortcode"""
        seen = []
        registry = ShortcodeRegistry()
        registry.shortcode_add("spy", FileKind.MARKDOWN, lambda sc: seen.append(sc) or "")

        shortcodes_insert("{% spy(n=[1, 2]) %}raw {{ x() }}{% end %}", registry, FileKind.MARKDOWN, settings)

        assert seen[0].arguments["n"].python() == [1, 2]
        assert seen[0].body == "raw {{ x() }}"


class TestContentRender:
    """Test the full render pipeline"""

    def test_full_pipeline(self, registry, settings):
        """Markdown shortcodes, conversion, then HTML shortcodes"""
        def convert(text):
            return text.replace("**", "<b>", 1).replace("**", "</b>", 1)

        source = "{% bold() %}{{ year() }}{% end %}\n{% div(cls='note') %}x{% end %}{{ hr() }}"
        state = content_render(source, registry, convert, verbosity=0, settings=settings)

        assert state.content == '<b>2024</b>\n<div class="note">x</div><hr>'
        assert state.fileKind is FileKind.HTML
        assert state.passes == 3

    def test_without_converter(self, registry, settings):
        """No converter passes content straight to the HTML pass"""
        state = content_render("{{ year() }}{{ hr() }}", registry, verbosity=0, settings=settings)
        assert state.content == "2024<hr>"

    def test_logging_state_restored(self, registry, settings):
        """A verbose render does not leave its verbosity connected"""
        from loguru import logger

        from shortscan.lib.log import LOG, state_connectToLogger

        messages = []
        sink = logger.add(messages.append, format="{message}")
        try:
            state_connectToLogger(None)
            content_render("{{ year() }}", registry, verbosity=3, settings=settings)
            LOG("after render", level=1)
        finally:
            logger.remove(sink)
            state_connectToLogger(None)

        text = "".join(messages)
        assert "Located" in text
        assert "after render" not in text
