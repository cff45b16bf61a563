"""
Nesting locator tests - bodies are opaque

Shortcodes inside a body are never located in the same pass; they stay as
raw text in the enclosing body and are found by locating the body again.
"""

import pytest

from shortscan.lib.locator import locate
from shortscan.models.span import Span


class TestOpaqueBodies:
    """Test that body contents are not parsed"""

    def test_self_closing_inside_body(self, settings, placeholder):
        """A {{ }} inside a body is part of the body"""
        rewritten, shortcodes = locate("{% a() %}{{ b() }}{% end %}", settings)

        assert rewritten == placeholder
        assert len(shortcodes) == 1
        assert shortcodes[0].name == "a"
        assert shortcodes[0].body == "{{ b() }}"

    def test_same_name_embedded(self, settings):
        """Only the outer shortcode is located; the first end marker closes it"""
        rewritten, shortcodes = locate("{% a() %}{% a() %}Wow!{% end %}{% end %}", settings)

        assert len(shortcodes) == 1
        assert shortcodes[0].name == "a"
        assert shortcodes[0].body == "{% a() %}Wow!"

    def test_leftover_end_marker_is_text(self, settings, placeholder):
        """The end marker left over after an embedded opener stays in the output"""
        rewritten, _ = locate("{% a() %}{% a() %}Wow!{% end %}{% end %}", settings)
        assert rewritten == placeholder + "{% end %}"

    def test_malformed_inside_body(self, settings):
        """Broken tags inside a body are kept verbatim"""
        shortcode = locate("{% a() %}{{ oops( }} {% %}{% end %}", settings).shortcodes[0]
        assert shortcode.body == "{{ oops( }} {% %}"

    def test_text_after_body_is_scanned(self, settings, placeholder):
        """Scanning resumes normally once a body closes"""
        rewritten, shortcodes = locate("{% a() %}{{ x() }}{% end %} {{ b() }}", settings)

        assert rewritten == f"{placeholder} {placeholder}"
        assert [sc.name for sc in shortcodes] == ["a", "b"]
        assert shortcodes[0].body == "{{ x() }}"


class TestEmbeddedPass:
    """Locating a body again finds what was opaque the first time"""

    def test_second_pass_on_body(self, settings, placeholder):
        """The body's own shortcodes are found by locating the body"""
        outer = locate("{% a() %}Hi {{ b(n=1) }}!{% end %}", settings).shortcodes[0]
        rewritten, inner = locate(outer.body, settings)

        assert rewritten == f"Hi {placeholder}!"
        assert [sc.name for sc in inner] == ["b"]

    def test_second_pass_on_embedded_bodied(self, settings):
        """Bodied shortcodes embedded in a body are found by the second pass"""
        outer = locate("{% a() %}{% b() %}deep{% end %} {% end %}", settings).shortcodes[0]
        assert outer.body == "{% b() %}deep"

        inner = locate(outer.body + "{% end %}", settings).shortcodes[0]
        assert inner.name == "b"
        assert inner.body == "deep"

    def test_spans_relative_to_each_pass(self, settings, width):
        """Spans of a second pass index into that pass's rewritten string"""
        outer = locate("text {% a() %}xy{{ b() }}{% end %}", settings).shortcodes[0]
        inner = locate(outer.body, settings).shortcodes[0]
        assert inner.span == Span(2, 2 + width)


class TestEndMarkers:
    """Test end markers without an open body"""

    def test_spurious_end_marker(self, settings):
        """A lone end marker is ordinary text"""
        source = "before {% end %} after"
        assert locate(source, settings) == locate(source, settings)
        rewritten, shortcodes = locate(source, settings)
        assert rewritten == source
        assert shortcodes == []

    def test_spurious_end_between_shortcodes(self, settings, placeholder):
        """A lone end marker between shortcodes is kept in place"""
        rewritten, shortcodes = locate("{{ a() }}{% end %}{{ b() }}", settings)
        assert rewritten == f"{placeholder}{{% end %}}{placeholder}"
        assert len(shortcodes) == 2


class TestUnterminated:
    """Bodies that never close are kept as literal text"""

    def test_unterminated_body(self, settings):
        """No descriptor and no placeholder; the text is unchanged"""
        source = "start {% a() %}never closed"
        rewritten, shortcodes = locate(source, settings)
        assert rewritten == source
        assert shortcodes == []

    def test_later_shortcodes_found(self, settings, placeholder):
        """Scanning resumes after an unterminated opener"""
        source = "{% note() %} forgot end. {{ year() }}"
        rewritten, shortcodes = locate(source, settings)
        assert rewritten == f"{{% note() %}} forgot end. {placeholder}"
        assert [sc.name for sc in shortcodes] == ["year"]
        assert shortcodes[0].source_text(source) == "{{ year() }}"

    def test_several_unterminated_openers(self, settings, placeholder):
        """Each unterminated opener is dropped in turn"""
        source = "{% a() %} {% b() %} {{ c() }} end"
        rewritten, shortcodes = locate(source, settings)
        assert rewritten == f"{{% a() %}} {{% b() %}} {placeholder} end"
        assert [sc.name for sc in shortcodes] == ["c"]

    def test_later_shortcodes_multibyte(self, settings, placeholder):
        """Byte spans stay right after dropping an unterminated opener"""
        source = "ä {% note() %} ö {{ year() }} ü"
        rewritten, shortcodes = locate(source, settings)
        assert rewritten == f"ä {{% note() %}} ö {placeholder} ü"
        start = rewritten.encode("utf-8").index(placeholder.encode("utf-8"))
        assert shortcodes[0].span == Span(start, start + len(placeholder.encode("utf-8")))
        assert shortcodes[0].source_text(source) == "{{ year() }}"

    def test_earlier_shortcodes_survive(self, settings, placeholder):
        """Shortcodes before the unterminated body are still located"""
        source = "{{ a() }} then {% b() %} open"
        rewritten, shortcodes = locate(source, settings)
        assert rewritten == f"{placeholder} then {{% b() %}} open"
        assert [sc.name for sc in shortcodes] == ["a"]

    def test_no_orphan_placeholders(self, settings, placeholder):
        """Every placeholder in the output has a descriptor"""
        sources = [
            "{% a() %}",
            "{% a() %}{% end %}{% b() %}",
            "{{ x() }}{% a() %}x{% end %}{% c() %}y",
        ]
        for source in sources:
            rewritten, shortcodes = locate(source, settings)
            assert rewritten.count(placeholder) == len(shortcodes)


@pytest.mark.parametrize("depth", [1, 5, 200])
def test_deep_same_name_embedding(settings, depth):
    """Deep embedding never recurses; the outer body ends at the first end marker"""
    source = "{% a() %}" * depth + "core" + "{% end %}" * depth
    shortcodes = locate(source, settings).shortcodes
    assert len(shortcodes) == 1
    assert shortcodes[0].body == "{% a() %}" * (depth - 1) + "core"
