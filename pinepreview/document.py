"""Preview HTML document template.

The embedded web view cannot load local stylesheets or scripts by reference,
so every bundled asset is inlined as text. Only the KaTeX and Mermaid
libraries are pulled from versioned CDN URLs, and extension scripts keep
their ``file://`` references.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Sequence

from .assets import AssetCache
from .extensions import script_tags
from .themes import ThemePalette

KATEX_VERSION = "0.10.0-rc"
MERMAID_VERSION = "9.0.0"
KATEX_CDN_BASE = "https://cdnjs.cloudflare.com/ajax/libs/KaTeX/{version}"
MERMAID_CDN_URL = "https://cdnjs.cloudflare.com/ajax/libs/mermaid/{version}/mermaid.min.js"

HIGHLIGHT_START_SCRIPT = "if (window.hljs) { hljs.initHighlightingOnLoad(); }"

MATH_RENDER_SCRIPT = """\
    if (window.renderMathInElement) {
      renderMathInElement(document.body, {delimiters: [
        {left: "$$", right: "$$", display: true},
        {left: "$", right: "$", display: false},
      ]});
    }"""

# Mermaid expects <div class="mermaid">; markdown converters emit either
# <pre class="mermaid"> or <pre><code class="language-mermaid">.
MERMAID_BOOTSTRAP_SCRIPT = """\
  <script>
  if (window.mermaid) {
    var config = {
      startOnLoad: true,
      theme: (window.matchMedia && window.matchMedia("(prefers-color-scheme: dark)").matches) ? "dark" : "default",
      flowchart: {
        useMaxWidth: false,
        htmlLabels: true
      }
    };
    mermaid.initialize(config);
  }
  document.querySelectorAll("pre.mermaid, pre>code.language-mermaid").forEach($el => {
    if ($el.tagName === "CODE")
      $el = $el.parentElement
    var $div = document.createElement("div");
    $div.className = "mermaid";
    $div.textContent = $el.textContent;
    $el.replaceWith($div);
  })
  </script>"""

_SCRIPT_CLOSE_PATTERN = re.compile(r"</(script)", re.IGNORECASE)
_STYLE_CLOSE_PATTERN = re.compile(r"</(style)", re.IGNORECASE)


class TextDirection(str, Enum):
    NATURAL = "natural"
    RIGHT_TO_LEFT = "rtl"


def direction_attribute(direction: TextDirection | str | None) -> str:
    """Map a direction hint to the ``dir`` attribute; anything but RTL is auto."""
    return "rtl" if direction == TextDirection.RIGHT_TO_LEFT else "auto"


def katex_head_tags(version: str = KATEX_VERSION) -> str:
    base_url = KATEX_CDN_BASE.format(version=version)
    return (
        f'<link rel="stylesheet" href="{base_url}/katex.min.css">\n'
        f'  <script src="{base_url}/katex.min.js"></script>\n'
        f'  <script src="{base_url}/contrib/auto-render.min.js"></script>'
    )


def mermaid_script_url(version: str = MERMAID_VERSION) -> str:
    return MERMAID_CDN_URL.format(version=version)


def _inline_script(text: str) -> str:
    return _SCRIPT_CLOSE_PATTERN.sub(r"<\\/\1", text)


def _inline_style(text: str) -> str:
    return _STYLE_CLOSE_PATTERN.sub(r"<\\/\1", text)


def theme_override_css(palette: ThemePalette, use_system_appearance: bool = False) -> str:
    """Color rules that must follow the cached stylesheets to take precedence."""
    # With system appearance the host window paints the background.
    body_background = "transparent" if use_system_appearance else palette.background
    return "\n".join(
        [
            f"html, body {{ background: {body_background}; }}",
            f"code {{ background: {palette.code} !important }}",
            f"p, h1, h2, h3, h4, h5, h6, ul, ol, dl, li, table, tr {{ color: {palette.text}; }}",
            f"table tr {{ background: {palette.background}; }}",
            f"table tr:nth-child(2n) {{ background: {palette.darker_background}; }}",
            f"table tr th, table tr td {{ border-color: {palette.code} }}",
        ]
    )


def build_document(
    assets: AssetCache,
    palette: ThemePalette,
    content: str,
    *,
    direction: TextDirection | str | None = TextDirection.NATURAL,
    scroll_offset: int = 0,
    use_system_appearance: bool = False,
    extension_scripts: Sequence[str] = (),
) -> str:
    """Assemble a self-contained preview page around an HTML fragment.

    ``content`` is trusted converter output and is inserted unchanged.
    """
    dir_attr = direction_attribute(direction)
    offset = int(scroll_offset)
    overrides = theme_override_css(palette, use_system_appearance)
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8"/>
  <style>
{_inline_style(assets.syntax_theme_stylesheet)}
{_inline_style(assets.base_stylesheet)}
{overrides}
  </style>
  <script>{_inline_script(assets.engine_script)}</script>
  <script>{HIGHLIGHT_START_SCRIPT}</script>

  {katex_head_tags()}
  <script src="{mermaid_script_url()}"></script>
</head>
<body dir="{dir_attr}">
{content}

<div>
  <script>
    window.scrollTo(0, {offset});
  </script>
  <script>
{MATH_RENDER_SCRIPT}
  </script>
{MERMAID_BOOTSTRAP_SCRIPT}
  {script_tags(extension_scripts)}
</div>
</body>
</html>
"""
