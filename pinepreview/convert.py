"""Markdown to HTML fragment conversion used by the command line."""

from __future__ import annotations

import html

from markdown_it import MarkdownIt
from mdit_py_plugins.dollarmath import dollarmath_plugin


def _math_inline(tokens, idx, options, env):
    # Keep TeX raw for KaTeX auto-render, only HTML-escape unsafe chars.
    return f"${html.escape(tokens[idx].content)}$"


def _math_block(tokens, idx, options, env):
    math_body = (tokens[idx].content or "").strip("\n")
    return f'<div class="math-block">$$\n{html.escape(math_body)}\n$$</div>\n'


def build_markdown() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"html": True, "typographer": True}).enable("table").enable("strikethrough")
    # Parse $...$ / $$...$$ before emphasis rules can mangle TeX.
    md.use(dollarmath_plugin)
    md.renderer.rules["math_inline"] = _math_inline
    md.renderer.rules["math_block"] = _math_block
    return md


def render_fragment(markdown_text: str, md: MarkdownIt | None = None) -> str:
    return (md or build_markdown()).render(markdown_text)
