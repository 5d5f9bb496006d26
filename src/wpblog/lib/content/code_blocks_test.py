"""Tests for the Code Block Pro rewriter."""

import pytest
from bs4 import BeautifulSoup

from .code_blocks import (
    DEFAULT_LABEL,
    build_fragment,
    detect_language,
    find_code_blocks,
    font_family_label,
    rewrite_code_blocks,
)

WINDOW_DOTS = (
    '<span style="display:block;padding:16px 0 0 16px;margin-bottom:-1px;'
    'width:100%;text-align:left;background-color:#24292e">'
    '<svg xmlns="http://www.w3.org/2000/svg" width="54" height="14" viewBox="0 0 54 14">'
    '<g fill="none"><circle cx="6" cy="6" r="6" fill="#FF5F56"></circle></g></svg></span>'
)

PLUGIN_COPY_BUTTON = (
    '<span role="button" tabindex="0" data-code="npm install" '
    'style="color:#e1e4e8;display:none" aria-label="Copy" class="code-block-pro-copy-button">'
    '<textarea class="code-block-pro-copy-button-textarea" aria-hidden="true" readonly>'
    "npm install --save left-pad</textarea>"
    '<svg xmlns="http://www.w3.org/2000/svg" style="width:24px;height:24px" fill="none">'
    '<path d="M9 5H7"></path></svg></span>'
)

SHELL_BLOCK = (
    '<div class="wp-block-kevinbatdorf-code-block-pro" '
    'data-code-block-pro-font-family="Code-Pro-JetBrains-Mono" '
    'style="font-size:.875rem;font-family:Code-Pro-JetBrains-Mono,ui-monospace;'
    'line-height:1.25rem;--cbp-tab-width:2">'
    f"{WINDOW_DOTS}{PLUGIN_COPY_BUTTON}"
    '<pre class="shiki github-dark" style="background-color: #24292e" tabindex="0"><code>'
    '<span class="line"><span style="color: #B392F0">npm</span>'
    '<span style="color: #E1E4E8"> install --save left-pad</span></span>'
    "</code></pre></div>"
)

TITLED_BLOCK = (
    '<div class="wp-block-kevinbatdorf-code-block-pro" '
    'data-code-block-pro-font-family="Code-Pro-JetBrains-Mono">'
    '<span style="display:flex;align-items:center;padding:10px 0px 10px 16px;'
    "background-color:#2e3440;color:#d8dee9;border-bottom:1px solid #3b4252\">"
    "&#8220;Hello&#8221; &#8211; demo</span>"
    '<pre class="shiki nord"><code><span class="line">'
    '<span style="color: #81A1C1">const</span><span style="color: #D8DEE9"> x </span>'
    "</span></code></pre></div>"
)


class TestDetectLanguage:
    @pytest.mark.parametrize(
        "code, expected",
        [
            ("git commit -m 'x' && function f() {}", "Bash"),
            ("npm i; const x = 1", "Shell"),
            ("pnpm add vite", "Shell"),
            ("const x = 1;", "JavaScript"),
            ("interface A {}", "TypeScript"),
            ("<?php echo 1;", "PHP"),
            ("import os", "Python"),
            ("SELECT 1", None),
            ("", None),
        ],
    )
    def test_precedence(self, code, expected):
        assert detect_language(code) == expected


def test_font_family_label():
    soup = BeautifulSoup(
        '<div data-code-block-pro-font-family="Code-Pro-Fira-Code"></div>', "html.parser"
    )
    assert font_family_label(soup.div) == "Fira Code"
    assert font_family_label(BeautifulSoup("<div></div>", "html.parser").div) == ""


class TestRewrite:
    def test_plugin_block_is_normalized(self):
        out = rewrite_code_blocks(SHELL_BLOCK)

        assert out.startswith(
            '<div class="wp-block-code-block-pro"><div class="code-block-header">'
            '<span class="code-language">Shell</span>'
            '<span role="button" aria-label="Copy" data-code="npm install --save left-pad">'
        )
        assert (
            '<span class="line"><span>npm</span><span> install --save left-pad</span></span>'
            in out
        )
        assert "<textarea" not in out
        assert "code-block-pro-copy-button" not in out
        assert "#FF5F56" not in out
        assert "data-code-block-pro-font-family" not in out
        assert "wp-block-kevinbatdorf-code-block-pro" not in out
        assert out.endswith("</code></pre></div>")

    def test_custom_title_wins_and_is_removed(self):
        out = rewrite_code_blocks(TITLED_BLOCK)

        assert '<span class="code-language">"Hello" – demo</span>' in out
        assert "border-bottom" not in out
        assert "JavaScript" not in out
        assert 'data-code="const x "' in out

    def test_copy_text_is_decoded_then_attribute_quoted(self):
        block = (
            '<div class="wp-block-kevinbatdorf-code-block-pro">'
            "<pre><code>&lt;div class=&quot;box&quot;&gt;&lt;/div&gt;</code></pre></div>"
        )
        out = rewrite_code_blocks(block)
        assert 'data-code="<div class=&quot;box&quot;></div>"' in out

    def test_unlisted_mono_font_is_not_a_language(self):
        block = (
            '<div class="wp-block-kevinbatdorf-code-block-pro" '
            'data-code-block-pro-font-family="Code-Pro-Maple-Mono">'
            "<pre><code>import os</code></pre></div>"
        )
        out = rewrite_code_blocks(block)
        assert '<span class="code-language">Python</span>' in out
        assert "Maple" not in out

    def test_font_family_label_used_when_specific(self):
        block = (
            '<div class="wp-block-kevinbatdorf-code-block-pro" '
            'data-code-block-pro-font-family="Code-Pro-Rust">'
            "<pre><code>fn main() {}</code></pre></div>"
        )
        assert '<span class="code-language">Rust</span>' in rewrite_code_blocks(block)

    def test_block_without_code(self):
        out = rewrite_code_blocks('<div class="wp-block-kevinbatdorf-code-block-pro"></div>')
        assert out == (
            '<div class="wp-block-code-block-pro"><div class="code-block-header">'
            f'<span class="code-language">{DEFAULT_LABEL}</span></div><pre></pre></div>'
        )

    def test_empty_code_has_no_copy_button(self):
        out = rewrite_code_blocks(
            '<div class="wp-block-kevinbatdorf-code-block-pro"><pre><code></code></pre></div>'
        )
        assert 'role="button"' not in out
        assert "<pre><code></code></pre>" in out

    def test_keeps_other_attributes_and_classes(self):
        block = (
            '<div id="snippet-1" class="wp-block-kevinbatdorf-code-block-pro padding-disabled" '
            'style="font-size:14px"><pre><code>x</code></pre></div>'
        )
        out = rewrite_code_blocks(block)
        assert out.startswith(
            '<div class="wp-block-code-block-pro padding-disabled" id="snippet-1">'
        )
        assert "font-size" not in out

    def test_multiple_blocks_in_order(self):
        html = f"<p>one</p>{SHELL_BLOCK}<p>two</p>{TITLED_BLOCK}<p>three</p>"
        out = rewrite_code_blocks(html)

        assert out.count('class="code-block-header"') == 2
        assert out.index(">Shell<") < out.index("demo</span>")
        assert out.startswith("<p>one</p>")
        assert out.endswith("<p>three</p>")
        assert "<p>two</p>" in out

    def test_input_without_blocks_is_unchanged(self):
        html = '<p style="color:red">x<br>y</p>'
        assert rewrite_code_blocks(html) == html
        assert rewrite_code_blocks("") == ""


def test_find_code_blocks_skips_nested_containers():
    html = (
        '<div class="wp-block-kevinbatdorf-code-block-pro">'
        '<div class="wp-block-kevinbatdorf-code-block-pro"><pre>inner</pre></div></div>'
    )
    soup = BeautifulSoup(html, "html.parser")
    assert len(find_code_blocks(soup)) == 1


def test_build_fragment_prefers_textarea_copy_text():
    soup = BeautifulSoup(SHELL_BLOCK, "html.parser")
    fragment = build_fragment(find_code_blocks(soup)[0])

    assert fragment.code_for_copy == "npm install --save left-pad"
    assert fragment.custom_title == ""
    assert fragment.label == "Shell"
