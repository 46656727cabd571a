"""End-to-end tests: scan, markdown-it rendering, resynthesis."""

from __future__ import annotations

import logging
import re

import pytest

from texmark import (
    IdentityRenderer,
    MarkdownItRenderer,
    MarkupRenderer,
    MathMarkdown,
    RenderConfig,
    render,
)


def strip_tags(html: str) -> str:
    return re.sub(r"<[^>]+>", "", html).strip()


class TestRender:
    def test_block_round_trip(self) -> None:
        html = render("$$ x^2 $$")
        assert html == '<div class="math-block"><span class="katex-display">$$x^2$$</span></div>\n'
        assert strip_tags(html) == "$$x^2$$"

    def test_inline_in_paragraph(self) -> None:
        assert render("Energy: $E = mc^2$") == '<p>Energy: <span class="math-inline">$E = mc^2$</span></p>\n'

    def test_emphasis_does_not_touch_math(self) -> None:
        html = render("$a_1 * b_2$ and $c_3$")
        assert "<em>" not in html
        assert '<span class="math-inline">$a_1 * b_2$</span>' in html
        assert '<span class="math-inline">$c_3$</span>' in html

    def test_backslashes_survive(self) -> None:
        html = render("Set \\(\\{x \\mid x > 0\\}\\) here")
        assert '<span class="math-inline">$\\{x \\mid x > 0\\}$</span>' in html

    def test_bracket_block_between_paragraphs(self) -> None:
        html = render("Before\n\n\\[\n\\sum_{i=1}^n i\n\\]\n\nAfter")
        assert "<p>Before</p>" in html
        assert '<div class="math-block"><span class="katex-display">$$\\sum_{i=1}^n i$$</span></div>' in html
        assert "<p>After</p>" in html

    def test_markdown_still_rendered(self) -> None:
        html = render("# Title\n\n**bold** and $x$")
        assert "<h1>Title</h1>" in html
        assert "<strong>bold</strong>" in html

    def test_escaped_dollars(self) -> None:
        html = render("\\$5 and \\$10")
        assert "math-inline" not in html
        assert "$5 and $10" in html

    def test_no_placeholder_left_behind(self) -> None:
        html = render("$a$ $$b$$ \\[c\\] \\(d\\)")
        assert "<!--MATH_" not in html

    def test_code_span_keeps_dollars(self) -> None:
        assert render("`$HOME` costs $5") == "<p><code>$HOME</code> costs $5</p>\n"

    def test_fenced_code_keeps_dollars(self) -> None:
        html = render("```\n$x$\n```\n")
        assert html == "<pre><code>$x$\n</code></pre>\n"

    def test_unprotected_code_loses_span_gracefully(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="texmark"):
            html = render("`$x$`", config=RenderConfig(protect_code=False))
        assert "<code>" in html
        assert "math-inline" not in html
        assert caplog.records

    def test_math_between_stray_backticks(self) -> None:
        html = render("Type a ` to quote.\n\n$x^2$\n\nAnother ` here.")
        assert '<p><span class="math-inline">$x^2$</span></p>' in html

    def test_escaped_backtick_keeps_math(self) -> None:
        html = render("a \\` b $y$ c `")
        assert html == '<p>a ` b <span class="math-inline">$y$</span> c `</p>\n'

    def test_line_starting_with_inline_math_stays_markdown(self) -> None:
        html = render("$x$ is **bold**\nand *y*")
        assert html == '<p><span class="math-inline">$x$</span> is <strong>bold</strong>\nand <em>y</em></p>\n'

    def test_list_item_starting_with_inline_math(self) -> None:
        html = render("- $x$ is **bold**\n")
        assert '<li><span class="math-inline">$x$</span> is <strong>bold</strong></li>' in html

    def test_no_word_joiner_left_behind(self) -> None:
        assert "\u2060" not in render("$a$ and \\(b\\)\n\n$c$ starts a line")

    def test_table_cells(self) -> None:
        html = render("| a | b |\n|---|---|\n| $x$ | 2 |\n")
        assert "<table>" in html
        assert '<td><span class="math-inline">$x$</span></td>' in html

    def test_strikethrough(self) -> None:
        assert "<s>gone</s>" in render("~~gone~~ $x$")

    def test_footnotes(self) -> None:
        html = render("Claim[^1] with $x$.\n\n[^1]: Proof by $y$.\n")
        assert "footnote-ref" in html
        assert '<span class="math-inline">$y$</span>' in html

    def test_task_lists(self) -> None:
        html = render("- [ ] prove $a$\n- [x] state $b$\n")
        assert 'type="checkbox"' in html
        assert '<span class="math-inline">$a$</span>' in html

    def test_features_can_be_disabled(self) -> None:
        html = render("~~gone~~", config=RenderConfig(strikethrough_enabled=False))
        assert "<s>" not in html

    def test_custom_renderer(self) -> None:
        html = render("$$x$$ and $y$", renderer=IdentityRenderer())
        assert html == (
            '<div class="math-block"><span class="katex-display">$$x$$</span></div>'
            ' and <span class="math-inline">$y$</span>'
        )


class TestRenderers:
    def test_protocol_conformance(self) -> None:
        assert isinstance(MarkdownItRenderer(), MarkupRenderer)
        assert isinstance(IdentityRenderer(), MarkupRenderer)

    def test_comments_pass_through(self) -> None:
        token = "<!--MATH_INLINE_0123abcd_0-->"
        assert MarkdownItRenderer().render(f"text {token} text") == f"<p>text {token} text</p>\n"

    def test_block_comment_passes_through(self) -> None:
        token = "<!--MATH_BLOCK_0123abcd_0-->"
        assert MarkdownItRenderer().render(token) == f"{token}\n"

    def test_empty_paragraphs_removed(self) -> None:
        assert "<p></p>" not in MarkdownItRenderer().render("")


class TestMathMarkdown:
    def test_call(self) -> None:
        md = MathMarkdown()
        assert md("Inline \\(a^2\\) math") == '<p>Inline <span class="math-inline">$a^2$</span> math</p>\n'

    def test_stages(self) -> None:
        md = MathMarkdown()
        text, spans = md.scan("$$x$$")
        assert md.resynthesize(text, spans) == '<div class="math-block"><span class="katex-display">$$x$$</span></div>'

    def test_config_applies(self) -> None:
        md = MathMarkdown(config=RenderConfig(inline_class="im"))
        assert md.config.inline_class == "im"
        assert '<span class="im">$x$</span>' in md("$x$")

    def test_reusable(self) -> None:
        md = MathMarkdown()
        first = md("$a$ and $$b$$")
        second = md("$a$ and $$b$$")
        assert first == second
