"""HTML renderer for the output buffer.

Turns enter/leave/flush calls from the output buffer into HTML. Structural
tags come from a fixed tag table and are indented two spaces per open
level; flushed text is escaped and run through the inline pipeline.

Inline pipeline, in order:
    1. emphasis (bold, italic, underline, code, verbatim, strike-through)
    2. sub/superscripts (when enabled)
    3. bare image links
    4. general links
    5. table cells (table rows and headers only)
    6. footnote references (when enabled)
    7. special symbols

Code blocks skip the pipeline. Source blocks that declare a language are
handed to the injected highlighter, if there is one.

Usage:
    >>> from orgrender.buffer import render_lines
    >>> from orgrender.classifier import classify
    >>> render_lines(classify("Hello *World*"), HtmlRenderer())
    '<p>Hello <b>World</b></p>\\n'

"""

from __future__ import annotations

import html
import logging
import re
from types import MappingProxyType
from typing import TYPE_CHECKING

from orgrender.config import DEFAULT_CONFIG, RenderConfig
from orgrender.errors import HeadlineCountError
from orgrender.highlighting import Highlighter, highlight_block
from orgrender.lines import Headline
from orgrender.modes import CODE_MODES, TABLE_MODES, Mode
from orgrender.rewrite import (
    CodeSnippets,
    rewrite_emphasis,
    rewrite_footnotes,
    rewrite_images,
    rewrite_links,
    rewrite_subp,
)
from orgrender.symbols import special_symbols_to_html
from orgrender.utils.logger import get_logger

if TYPE_CHECKING:
    from orgrender.renderers.protocol import BufferView

BLOCK_TAGS = MappingProxyType(
    {
        Mode.PARAGRAPH: "p",
        Mode.UNORDERED_LIST: "ul",
        Mode.ORDERED_LIST: "ol",
        Mode.LIST_ITEM: "li",
        Mode.DEFINITION_LIST: "dl",
        Mode.TABLE: "table",
        Mode.TABLE_ROW: "tr",
        Mode.TABLE_HEADER: "tr",
        Mode.BLOCKQUOTE: "blockquote",
        Mode.EXAMPLE: "pre",
        Mode.SRC: "pre",
        Mode.INLINE_EXAMPLE: "pre",
        Mode.CENTER: "div",
        Mode.HEADING1: "h1",
        Mode.HEADING2: "h2",
        Mode.HEADING3: "h3",
        Mode.HEADING4: "h4",
        Mode.HEADING5: "h5",
        Mode.HEADING6: "h6",
    }
)

EMPHASIS_TAGS = MappingProxyType(
    {
        "*": ("<b>", "</b>"),
        "/": ("<i>", "</i>"),
        "_": ('<span style="text-decoration:underline;">', "</span>"),
        "=": ("<code>", "</code>"),
        "~": ("<code>", "</code>"),
        "+": ("<del>", "</del>"),
    }
)

_TITLE_CLASS = ' class="title"'

_SEARCH_LINK_RE = re.compile(r"^file:(.*)::(.*?)$")
_ORG_FILE_LINK_RE = re.compile(r"^file:.*\.org$")
_ORG_EXTENSION_RE = re.compile(r"\.org$", re.IGNORECASE)
_FILE_SCHEME_RE = re.compile(r"^file:", re.IGNORECASE)
_IMAGE_TEXT_RE = re.compile(r"^[^\]\s]+\.(?:jpg|jpeg|gif|png)$", re.IGNORECASE)

_CELL_OPEN_RE = re.compile(r"^\|\s*")
_CELL_CLOSE_RE = re.compile(r"\s*\|$")
_CELL_SPLIT_RE = re.compile(r"\s*\|\s*")


def html_escape(s: str) -> str:
    """Escape ``&``, ``<`` and ``>``, ampersand first.

    Quotes are left alone: flushed text is element content, never an
    attribute value.
    """
    return html.escape(s, quote=False)


def _wrap_emphasis(marker: str, body: str) -> str:
    open_tag, close_tag = EMPHASIS_TAGS[marker]
    return f"{open_tag}{body}{close_tag}"


def _wrap_subp(kind: str, text: str) -> str:
    if kind == "_":
        return f"<sub>{text}</sub>"
    return f"<sup>{text}</sup>"


def _image_link(link: str) -> str:
    return f'<a href="{link}"><img src="{link}" /></a>'


def _link(link: str, text: str | None) -> str:
    """Render an org link.

    Search options in file links are dropped, links to ``.org`` files point
    at the exported ``.html`` file, and the ``file:`` scheme is stripped.
    """
    text = text or link
    link = _SEARCH_LINK_RE.sub(r"file:\1", link)
    if _ORG_FILE_LINK_RE.match(link):
        link = _ORG_EXTENSION_RE.sub(".html", link)
    link = _FILE_SCHEME_RE.sub("", link)
    if _IMAGE_TEXT_RE.match(text):
        text = f'<img src="{text}" />'
    return f'<a href="{link}">{text}</a>'


def _table_cells(text: str, tag: str) -> str:
    text = _CELL_OPEN_RE.sub(f"<{tag}>", text)
    text = _CELL_CLOSE_RE.sub(f"</{tag}>", text)
    return _CELL_SPLIT_RE.sub(f"</{tag}><{tag}>", text)


class HtmlRenderer:
    """Render output buffer flushes as HTML.

    One instance serves one conversion: it collects footnotes and carries
    the one-shot title decoration.

    Usage:
        >>> from orgrender.buffer import OutputBuffer
        >>> from orgrender.lines import Line
        >>> buf = OutputBuffer(HtmlRenderer())
        >>> buf.feed(Line("| a | b |", Mode.TABLE_ROW, major_mode=Mode.TABLE))
        >>> buf.finish()
        '<table>\\n  <tr><td>a</td><td>b</td></tr>\\n</table>\\n'

    """

    __slots__ = ("_config", "_highlighter", "_logger", "_title_decoration", "_footnotes")

    def __init__(
        self,
        config: RenderConfig | None = None,
        *,
        highlighter: Highlighter | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            config: Export options (defaults if None)
            highlighter: Highlighter owning src blocks that declare a language;
                None renders them as escaped ``<pre>`` blocks
            logger: Diagnostics logger (module logger if None)
        """
        self._config = config or DEFAULT_CONFIG
        self._highlighter = highlighter
        self._logger = logger or get_logger(__name__)
        self._title_decoration = _TITLE_CLASS if self._config.decorate_title else ""
        self._footnotes: dict[str, str] = {}
        self._logger.debug("HTML export options: %r", self._config)

    @property
    def config(self) -> RenderConfig:
        return self._config

    @property
    def footnotes(self) -> dict[str, str]:
        """Footnote definitions collected so far, in registration order."""
        return dict(self._footnotes)

    # =========================================================================
    # Renderer protocol
    # =========================================================================

    def enter(self, mode: Mode, indent: int, buffer: BufferView) -> bool:
        """Write the opening tag for a mode."""
        tag = BLOCK_TAGS.get(mode)
        if tag is None:
            return False

        css_class = self._title_decoration
        if mode is Mode.SRC:
            lang = buffer.block_lang
            css_class = f' class="src src-{html.escape(lang)}"' if lang else ' class="src"'
        elif mode is Mode.EXAMPLE or mode is Mode.INLINE_EXAMPLE:
            css_class = ' class="example"'
        elif mode is Mode.CENTER:
            css_class = ' style="text-align: center"'

        # Any open consumes the title decoration
        self._title_decoration = ""

        if self._is_suppressed(mode, buffer):
            return True
        self._start_line(buffer)
        self._logger.debug("%s: <%s%s>", mode.name, tag, css_class)
        buffer.output.append(f"<{tag}{css_class}>")
        return False

    def leave(self, mode: Mode, buffer: BufferView) -> Mode:
        """Write the closing tag for a mode."""
        tag = BLOCK_TAGS.get(mode)
        if tag is not None and not self._is_suppressed(mode, buffer):
            out = buffer.output
            if out.at_line_start and mode not in CODE_MODES:
                out.append("  " * buffer.depth)
            self._logger.debug("</%s>", tag)
            out.append_line(f"</{tag}>")
        return mode

    def flush(self, buffer: BufferView) -> None:
        """Write the accumulated text according to its buffer mode."""
        text = buffer.text
        mode = buffer.buffer_mode
        out = buffer.output

        if mode is Mode.SRC and self._highlights(buffer):
            self._flush_highlighted(text, buffer)
            return

        if mode in CODE_MODES:
            # Whitespace is significant: no inline formatting
            self._logger.debug("FLUSH CODE ==========> %r", text)
            out.append(html_escape(text))
            return

        if not text:
            # An untitled headline still takes its outline number
            if buffer.lines and isinstance(buffer.lines[0], Headline):
                self._flush_text(text, buffer)
            return

        if buffer.output_type is Mode.HORIZONTAL_RULE:
            self._start_line(buffer)
            out.append("<hr />\n")
        elif mode is Mode.DEFINITION_ITEM:
            self._flush_definition(html_escape(text), buffer)
        elif mode in TABLE_MODES and self._config.skip_tables:
            self._logger.debug("SKIP       ==========> %s", mode.name)
        else:
            self._logger.debug("FLUSH      ==========> %s", mode.name if mode else None)
            self._flush_text(html_escape(text), buffer)

    def emit_footnotes(self, buffer: BufferView) -> bool:
        """Write the footnotes section; False when there is nothing to write."""
        if not (self._config.export_footnotes and self._footnotes):
            return False

        out = buffer.output
        if not out.at_line_start:
            out.append("\n")
        out.append(
            '<div id="footnotes">\n'
            '<h2 class="footnotes">Footnotes:</h2>\n'
            '<div id="text-footnotes">\n'
        )
        # Formatting a definition may register further footnotes
        for name, definition in list(self._footnotes.items()):
            out.append(
                f'<p class="footnote"><sup><a class="footnum" name="fn.{name}" '
                f'href="#fnr.{name}">{name}</a></sup>'
            )
            out.append(self.inline_formatting(definition))
            out.append("\n</p>\n")
        out.append("</div>\n</div>\n")
        return True

    # =========================================================================
    # Inline pipeline
    # =========================================================================

    def inline_formatting(self, text: str, output_type: Mode = Mode.PARAGRAPH) -> str:
        """Apply the inline rewriting pipeline to escaped text.

        Args:
            text: Escaped text
            output_type: Output type of the flushed line (selects table cells)

        Returns:
            HTML fragment
        """
        snippets = CodeSnippets()
        text = rewrite_emphasis(text, _wrap_emphasis, snippets)
        if self._config.use_sub_superscripts:
            text = rewrite_subp(text, _wrap_subp)
        text = rewrite_images(text, _image_link)
        text = rewrite_links(text, _link)

        if output_type is Mode.TABLE_ROW:
            text = _table_cells(text, "td")
        elif output_type is Mode.TABLE_HEADER:
            text = _table_cells(text, "th")

        if self._config.export_footnotes:

            def _footnote(name: str, definition: str | None) -> str:
                if definition is not None:
                    if name in self._footnotes:
                        self._logger.debug("Footnote %r already defined, keeping the first", name)
                    else:
                        self._footnotes[name] = snippets.restore(definition)
                return (
                    f'<sup><a class="footref" name="fnr.{name}" '
                    f'href="#fn.{name}">{name}</a></sup>'
                )

            text = rewrite_footnotes(text, _footnote)

        text = special_symbols_to_html(text)
        return snippets.restore(text)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _flush_text(self, text: str, buffer: BufferView) -> None:
        out = buffer.output
        lines = buffer.lines
        if lines and isinstance(lines[0], Headline):
            if len(lines) > 1:
                raise HeadlineCountError(len(lines))
            headline = lines[0]
            if self._config.export_heading_number:
                level = headline.level
                number = buffer.next_headline_number(level)
                out.append(
                    f'<span class="heading-number heading-number-{level}">{number} </span>'
                )
            if self._config.export_todo_keyword and headline.keyword:
                keyword = headline.keyword
                out.append(f'<span class="todo-keyword {keyword}">{keyword} </span>')

        out.append(self.inline_formatting(text, buffer.output_type))

    def _flush_definition(self, text: str, buffer: BufferView) -> None:
        out = buffer.output
        decoration = self._title_decoration
        term, separator, description = text.partition("::")

        self._start_line(buffer)
        out.append(f"<dt{decoration}>{self.inline_formatting(term.strip())}</dt>")
        if separator:
            description = self.inline_formatting(description.strip())
            out.append_line(f"<dd{decoration}>{description}</dd>")
        else:
            out.append_line()
        self._title_decoration = ""

    def _flush_highlighted(self, code: str, buffer: BufferView) -> None:
        assert self._highlighter is not None
        lang = buffer.block_lang
        highlighted = highlight_block(self._highlighter, code, lang, self._logger)
        if highlighted is None:
            # The open tag was suppressed, so the fallback carries its own
            highlighted = f'<pre class="src src-{html.escape(lang)}">{html_escape(code)}</pre>'
        if not highlighted.endswith("\n"):
            highlighted += "\n"
        self._logger.debug("FLUSH SRC CODE ==========> %r", highlighted)
        buffer.output.append(highlighted)

    def _highlights(self, buffer: BufferView) -> bool:
        return self._highlighter is not None and bool(buffer.block_lang)

    def _is_suppressed(self, mode: Mode, buffer: BufferView) -> bool:
        if mode in TABLE_MODES and self._config.skip_tables:
            return True
        return mode is Mode.SRC and self._highlights(buffer)

    def _start_line(self, buffer: BufferView) -> None:
        out = buffer.output
        if not out.at_line_start:
            out.append("\n")
        out.append("  " * buffer.depth)


__all__ = ["HtmlRenderer", "BLOCK_TAGS", "EMPHASIS_TAGS", "html_escape"]
