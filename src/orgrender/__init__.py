"""
orgrender: Org-mode to HTML conversion driven by indentation

Classifies org text line by line and feeds the lines through an output
buffer that infers nested structure (lists inside lists, blocks inside list
items) from indentation and line types alone. A pluggable renderer decides
what the structure looks like; HTML is built in.

Quick Start:
    >>> from orgrender import convert
    >>> convert("* Hello\\nSome *bold* text")
    '<h1>Hello</h1>\\n<p>Some <b>bold</b> text</p>\\n'

    >>> # Export options
    >>> from orgrender import RenderConfig
    >>> config = RenderConfig(export_heading_number=True)
    >>> convert("* One\\n** Two", config=config)
    '<h1><span class="heading-number heading-number-1">1 </span>One</h1>\\n<h2><span class="heading-number heading-number-2">1.1 </span>Two</h2>\\n'

Syntax Highlighting:
    from orgrender.highlighting import create_highlighter
    html = convert(source, highlighter=create_highlighter("rosettes"))

Installation:
    pip install orgrender              # Core converter (zero deps)
    pip install orgrender[syntax]      # + Syntax highlighting via Rosettes
    pip install orgrender[pygments]    # + Syntax highlighting via Pygments
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from orgrender.buffer import OutputBuffer, render_lines
from orgrender.classifier import DEFAULT_TODO_KEYWORDS, LineClassifier, classify
from orgrender.config import DEFAULT_CONFIG, RenderConfig
from orgrender.errors import (
    HeadlineCountError,
    InvalidLevelError,
    ModeMixError,
    OrgRenderError,
)
from orgrender.lines import Headline, Line
from orgrender.modes import Mode
from orgrender.renderers import BufferView, HtmlRenderer, Renderer
from orgrender.sink import OutputSink

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable

    from orgrender.highlighting import Highlighter

__version__ = "0.1.0"


def convert(
    source: str,
    *,
    config: RenderConfig | None = None,
    highlighter: Highlighter | None = None,
    todo_keywords: Iterable[str] = DEFAULT_TODO_KEYWORDS,
    logger: logging.Logger | None = None,
) -> str:
    """Convert org text to HTML.

    Args:
        source: Org text
        config: Export options (defaults if None)
        highlighter: Highlighter for src blocks that declare a language
        todo_keywords: Words recognized as TODO keywords in headlines
        logger: Diagnostics logger shared by the buffer and the renderer

    Returns:
        HTML fragment (no document wrapper)
    """
    renderer = HtmlRenderer(config, highlighter=highlighter, logger=logger)
    lines = classify(source, todo_keywords=todo_keywords)
    return render_lines(lines, renderer, logger=logger)


__all__ = [
    # Version
    "__version__",
    # High-level API
    "convert",
    "classify",
    "render_lines",
    # Engine
    "OutputBuffer",
    "OutputSink",
    "LineClassifier",
    "DEFAULT_TODO_KEYWORDS",
    # Lines and modes
    "Line",
    "Headline",
    "Mode",
    # Renderers
    "HtmlRenderer",
    "Renderer",
    "BufferView",
    # Configuration
    "RenderConfig",
    "DEFAULT_CONFIG",
    # Errors
    "OrgRenderError",
    "ModeMixError",
    "InvalidLevelError",
    "HeadlineCountError",
]
