"""Tests for litdoc.render."""

from __future__ import annotations

from litdoc.languages import DEFAULT_REGISTRY, Language
from litdoc.models import RenderedSection, Section
from litdoc.render import SectionRenderer

JAVASCRIPT = DEFAULT_REGISTRY.lookup(".js")


def test_render_maps_sections_one_to_one_in_order() -> None:
    assert JAVASCRIPT is not None
    sections = [
        Section(docs="First **bold** note.\n", code="var a = 1;\n"),
        Section(docs="", code="var b = 2;\n"),
        Section(docs="Trailing docs.\n", code=""),
    ]

    rendered = SectionRenderer(highlight=False).render(sections, JAVASCRIPT)

    assert rendered == [
        RenderedSection(docs_html="<p>First <strong>bold</strong> note.</p>", code_html="var a = 1;"),
        RenderedSection(docs_html="", code_html="var b = 2;"),
        RenderedSection(docs_html="<p>Trailing docs.</p>", code_html=""),
    ]


def test_code_is_escaped_when_highlighting_is_disabled() -> None:
    assert JAVASCRIPT is not None
    html = SectionRenderer(highlight=False).render_code("if (a < b && c) {}\n", JAVASCRIPT)
    assert html == "if (a &lt; b &amp;&amp; c) {}"


def test_code_is_highlighted_with_pygments() -> None:
    assert JAVASCRIPT is not None
    html = SectionRenderer().render_code("var answer = 42;\n", JAVASCRIPT)
    assert "<span" in html
    assert "answer" in html
    assert "<pre" not in html


def test_unknown_lexer_falls_back_to_plain_text() -> None:
    language = Language(name="weird", singleline="%%", lexer="definitely-not-a-lexer")
    html = SectionRenderer().render_code("a < b\n", language)
    assert "a &lt; b" in html


def test_markdown_extensions_are_applied() -> None:
    renderer = SectionRenderer(markdown_extensions=["fenced_code"])
    html = renderer.render_docs("```\nraw <code>\n```\n")
    assert "<pre><code>" in html
    assert "&lt;code&gt;" in html


def test_markdown_state_does_not_leak_between_sections() -> None:
    assert JAVASCRIPT is not None
    sections = [
        Section(docs="Uses a [ref][1].\n\n[1]: http://example.com\n", code=""),
        Section(docs="Another [ref][1].\n", code=""),
    ]

    rendered = SectionRenderer(highlight=False).render(sections, JAVASCRIPT)

    assert 'href="http://example.com"' in rendered[0].docs_html
    assert "href" not in rendered[1].docs_html


def test_stylesheet_targets_highlight_class() -> None:
    css = SectionRenderer(style="default").stylesheet()
    assert ".highlight" in css
