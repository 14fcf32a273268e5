"""Org line classifier.

Turns raw org text into the classified ``Line`` records the output buffer
consumes. Each line is classified on its own (window-free: no lookahead
inside a line), with three pieces of document state:

- inside a ``#+BEGIN_SRC``/``#+BEGIN_EXAMPLE`` block every line is verbatim
  until the matching ``#+END_`` line;
- an ``#+END_`` line takes the indent of the BEGIN line it closes;
- after all lines are classified, table rows above a table's first
  separator are assigned the TABLE_HEADER output type.

Usage:
    >>> lines = classify("* TODO Write docs\\n- first\\n- second")
    >>> [line.paragraph_type.name for line in lines]
    ['HEADING1', 'LIST_ITEM', 'LIST_ITEM']
    >>> lines[0].keyword
    'TODO'

Thread Safety:
LineClassifier instances hold per-document state. Create one per source
string, or call classify() which does.

"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import replace

from orgrender.lines import Headline, Line
from orgrender.modes import Mode

DEFAULT_TODO_KEYWORDS = ("TODO", "DONE")

_HEADLINE_RE = re.compile(r"^(\*+)\s+(.*?)\s*$")
_TAGS_RE = re.compile(r"\s+:[\w@#%:]+:\s*$")
_BLOCK_RE = re.compile(r"^\s*#\+(BEGIN|END)_(\w+)(?:[ \t]+(\S+))?", re.IGNORECASE)
_DEFINITION_RE = re.compile(r"^\s*(?:[-+]|\s+\*)\s+(?:.*\s+|)::(?:\s|$)")
_UNORDERED_RE = re.compile(r"^\s*(?:[-+]|\s+\*)\s+")
_ORDERED_RE = re.compile(r"^\s*\d+[.)]\s+")
_HORIZONTAL_RULE_RE = re.compile(r"^\s*-{5,}\s*$")
_TABLE_SEPARATOR_RE = re.compile(r"^\s*\|[-|+]*\s*$")
_TABLE_ROW_RE = re.compile(r"^\s*\|")
_INLINE_EXAMPLE_RE = re.compile(r"^\s*:(?:\s|$)")
_INLINE_EXAMPLE_PREFIX_RE = re.compile(r"^\s*: ?")
_COMMENT_RE = re.compile(r"^\s*#(?:\s|$)")
_SETTING_RE = re.compile(r"^\s*#\+\w+:")

# Block type -> major mode opened by its BEGIN line
_BLOCK_MODES = {
    "QUOTE": Mode.BLOCKQUOTE,
    "CENTER": Mode.CENTER,
    "EXAMPLE": Mode.EXAMPLE,
    "SRC": Mode.SRC,
}

# Blocks whose contents are taken verbatim
_CODE_BLOCKS = frozenset({"EXAMPLE", "SRC"})


def _indent_of(text: str) -> int:
    return len(text) - len(text.lstrip())


class LineClassifier:
    """Classify org lines one at a time.

    Usage:
            >>> classifier = LineClassifier()
            >>> classifier.classify_line("#+BEGIN_SRC python").major_mode.name
            'SRC'
            >>> classifier.classify_line("* not a headline").output_type.name
            'SRC'

    """

    __slots__ = ("_todo_keywords", "_code_block", "_open_blocks", "_lineno")

    def __init__(self, *, todo_keywords: Iterable[str] = DEFAULT_TODO_KEYWORDS) -> None:
        """Initialize classifier.

        Args:
            todo_keywords: Words recognized as TODO keywords at the start of
                a headline
        """
        self._todo_keywords = frozenset(todo_keywords)
        # (mode, block type, language, BEGIN indent) of the open verbatim block
        self._code_block: tuple[Mode, str, str, int] | None = None
        # (block type, BEGIN indent) of open quote and center blocks
        self._open_blocks: list[tuple[str, int]] = []
        self._lineno = 0

    def classify(self, source: str) -> list[Line]:
        """Classify every line of an org document."""
        lines = [self.classify_line(text) for text in source.splitlines()]
        return assign_table_headers(lines)

    def classify_line(self, text: str) -> Line:
        """Classify the next line of the document."""
        self._lineno += 1
        if self._code_block is not None:
            return self._classify_code_content(text)

        if not text.strip():
            return Line(text, Mode.BLANK, lineno=self._lineno)

        indent = _indent_of(text)
        return (
            self._try_classify_headline(text)
            or self._try_classify_block(text, indent)
            or self._try_classify_list(text, indent)
            or self._try_classify_table(text, indent)
            or self._try_classify_other(text, indent)
            or Line(text, Mode.PARAGRAPH, indent, lineno=self._lineno)
        )

    # =========================================================================
    # Classifiers
    # =========================================================================

    def _try_classify_headline(self, text: str) -> Headline | None:
        match = _HEADLINE_RE.match(text)
        if match is None:
            return None

        level = len(match.group(1))
        title = _TAGS_RE.sub("", match.group(2))
        keyword = None
        first, _, rest = title.partition(" ")
        if first in self._todo_keywords:
            keyword = first
            title = rest.strip()

        return Headline(
            text,
            Mode.heading(level),
            content=title,
            lineno=self._lineno,
            level=level,
            keyword=keyword,
        )

    def _try_classify_block(self, text: str, indent: int) -> Line | None:
        match = _BLOCK_RE.match(text)
        if match is None:
            return None

        block_type = match.group(2).upper()
        if match.group(1).upper() == "END":
            indent = self._close_block(block_type, indent)
            return Line(text, Mode.END_BLOCK, indent, is_end_block=True, lineno=self._lineno)

        major_mode = _BLOCK_MODES.get(block_type)
        is_code = block_type in _CODE_BLOCKS
        lang = (match.group(3) or "") if block_type == "SRC" else ""
        if is_code and major_mode is not None:
            self._code_block = (major_mode, block_type, lang, indent)
        elif major_mode is not None:
            self._open_blocks.append((block_type, indent))
        return Line(
            text,
            Mode.BEGIN_BLOCK,
            indent,
            major_mode=major_mode,
            is_code_block_line=is_code,
            block_lang=lang,
            is_begin_block=True,
            lineno=self._lineno,
        )

    def _try_classify_list(self, text: str, indent: int) -> Line | None:
        # A definition item is also an unordered item: test it first
        if _DEFINITION_RE.match(text):
            return Line(
                text,
                Mode.DEFINITION_ITEM,
                indent,
                major_mode=Mode.DEFINITION_LIST,
                content=_UNORDERED_RE.sub("", text).strip(),
                lineno=self._lineno,
            )
        if _ORDERED_RE.match(text):
            return Line(
                text,
                Mode.LIST_ITEM,
                indent,
                major_mode=Mode.ORDERED_LIST,
                content=_ORDERED_RE.sub("", text).strip(),
                lineno=self._lineno,
            )
        if _UNORDERED_RE.match(text):
            return Line(
                text,
                Mode.LIST_ITEM,
                indent,
                major_mode=Mode.UNORDERED_LIST,
                content=_UNORDERED_RE.sub("", text).strip(),
                lineno=self._lineno,
            )
        return None

    def _try_classify_table(self, text: str, indent: int) -> Line | None:
        if _TABLE_SEPARATOR_RE.match(text):
            return Line(
                text, Mode.TABLE_SEPARATOR, indent, major_mode=Mode.TABLE, lineno=self._lineno
            )
        if _TABLE_ROW_RE.match(text):
            return Line(text, Mode.TABLE_ROW, indent, major_mode=Mode.TABLE, lineno=self._lineno)
        return None

    def _try_classify_other(self, text: str, indent: int) -> Line | None:
        if _HORIZONTAL_RULE_RE.match(text):
            return Line(text, Mode.HORIZONTAL_RULE, indent, lineno=self._lineno)
        if _INLINE_EXAMPLE_RE.match(text):
            return Line(
                text,
                Mode.INLINE_EXAMPLE,
                indent,
                content=_INLINE_EXAMPLE_PREFIX_RE.sub("", text),
                lineno=self._lineno,
            )
        if _COMMENT_RE.match(text) or _SETTING_RE.match(text):
            return Line(text, Mode.COMMENT, indent, lineno=self._lineno)
        return None

    def _close_block(self, block_type: str, indent: int) -> int:
        for i in range(len(self._open_blocks) - 1, -1, -1):
            open_type, begin_indent = self._open_blocks[i]
            if open_type == block_type:
                del self._open_blocks[i:]
                return begin_indent
        return indent

    def _classify_code_content(self, text: str) -> Line:
        assert self._code_block is not None
        mode, block_type, lang, begin_indent = self._code_block

        match = _BLOCK_RE.match(text)
        if match and match.group(1).upper() == "END" and match.group(2).upper() == block_type:
            self._code_block = None
            # The END line closes at its BEGIN line's indent wherever it sits
            return Line(text, Mode.END_BLOCK, begin_indent, is_end_block=True, lineno=self._lineno)

        blank = not text.strip()
        return Line(
            text,
            Mode.BLANK if blank else Mode.PARAGRAPH,
            0 if blank else _indent_of(text),
            assigned_paragraph_type=mode,
            is_code_block_line=True,
            block_lang=lang,
            content=text,
            lineno=self._lineno,
        )


def assign_table_headers(lines: Sequence[Line]) -> list[Line]:
    """Mark rows above each table's first separator as header rows.

    Tables without a separator have no header.
    """
    result = list(lines)
    start = None
    for i in range(len(result) + 1):
        in_table = i < len(result) and result[i].paragraph_type in (
            Mode.TABLE_ROW,
            Mode.TABLE_SEPARATOR,
        )
        if in_table and result[i].assigned_paragraph_type is None:
            if start is None:
                start = i
            continue
        if start is not None:
            _mark_header_rows(result, start, i)
            start = None
    return result


def _mark_header_rows(lines: list[Line], start: int, end: int) -> None:
    for i in range(start, end):
        if lines[i].paragraph_type is Mode.TABLE_SEPARATOR:
            break
    else:
        return
    for j in range(start, i):
        lines[j] = replace(lines[j], assigned_paragraph_type=Mode.TABLE_HEADER)


def classify(source: str, *, todo_keywords: Iterable[str] = DEFAULT_TODO_KEYWORDS) -> list[Line]:
    """Classify an org document into Line records.

    Args:
        source: Org text
        todo_keywords: Words recognized as TODO keywords in headlines

    Returns:
        One Line (or Headline) per source line
    """
    return LineClassifier(todo_keywords=todo_keywords).classify(source)


__all__ = ["LineClassifier", "classify", "assign_table_headers", "DEFAULT_TODO_KEYWORDS"]
