"""Tests for the org line classifier."""

from __future__ import annotations

import pytest

from orgrender.classifier import LineClassifier, assign_table_headers, classify
from orgrender.lines import Headline, Line
from orgrender.modes import Mode


def _one(text: str) -> Line:
    (line,) = classify(text)
    return line


class TestHeadlines:
    """Outline headings."""

    def test_level_and_mode(self) -> None:
        line = _one("*** Deep")
        assert isinstance(line, Headline)
        assert line.level == 3
        assert line.paragraph_type is Mode.HEADING3
        assert line.content == "Deep"

    def test_keyword_and_tags(self) -> None:
        line = _one("* TODO Write docs   :work:urgent:")
        assert isinstance(line, Headline)
        assert line.keyword == "TODO"
        assert line.content == "Write docs"

    def test_custom_keywords(self) -> None:
        (line,) = classify("* WAIT Review", todo_keywords=("WAIT",))
        assert isinstance(line, Headline)
        assert line.keyword == "WAIT"

    def test_unknown_keyword_stays_in_title(self) -> None:
        line = _one("* TODO-ish thing")
        assert isinstance(line, Headline)
        assert line.keyword is None
        assert line.content == "TODO-ish thing"

    def test_emphasis_at_line_start_is_paragraph(self) -> None:
        assert _one("*bold* start").paragraph_type is Mode.PARAGRAPH


class TestLists:
    """List and definition items."""

    @pytest.mark.parametrize(
        ("text", "major", "content"),
        [
            ("- dash", Mode.UNORDERED_LIST, "dash"),
            ("+ plus", Mode.UNORDERED_LIST, "plus"),
            ("  * star", Mode.UNORDERED_LIST, "star"),
            ("1. one", Mode.ORDERED_LIST, "one"),
            ("12) twelve", Mode.ORDERED_LIST, "twelve"),
        ],
    )
    def test_items(self, text: str, major: Mode, content: str) -> None:
        line = _one(text)
        assert line.paragraph_type is Mode.LIST_ITEM
        assert line.major_mode is major
        assert line.content == content

    def test_definition_item(self) -> None:
        line = _one("  - term :: description")
        assert line.paragraph_type is Mode.DEFINITION_ITEM
        assert line.major_mode is Mode.DEFINITION_LIST
        assert line.content == "term :: description"
        assert line.indent == 2

    def test_double_colon_inside_word_is_plain_item(self) -> None:
        assert _one("- a::b").paragraph_type is Mode.LIST_ITEM


class TestTables:
    """Table rows and header assignment."""

    def test_rows_before_separator_are_headers(self) -> None:
        lines = classify("| h |\n|---+---|\n| r |")
        assert [line.output_type for line in lines] == [
            Mode.TABLE_HEADER,
            Mode.TABLE_SEPARATOR,
            Mode.TABLE_ROW,
        ]
        assert all(line.major_mode is Mode.TABLE for line in lines)

    def test_table_without_separator_has_no_header(self) -> None:
        lines = classify("| a |\n| b |")
        assert [line.output_type for line in lines] == [Mode.TABLE_ROW, Mode.TABLE_ROW]

    def test_each_table_gets_own_header(self) -> None:
        lines = classify("| a |\n\n| h |\n|---|\n| r |")
        assert [line.output_type for line in lines] == [
            Mode.TABLE_ROW,
            Mode.BLANK,
            Mode.TABLE_HEADER,
            Mode.TABLE_SEPARATOR,
            Mode.TABLE_ROW,
        ]

    def test_assign_table_headers_keeps_input(self) -> None:
        lines = [Line("| h |", Mode.TABLE_ROW), Line("|---|", Mode.TABLE_SEPARATOR)]
        result = assign_table_headers(lines)
        assert result[0].output_type is Mode.TABLE_HEADER
        assert lines[0].output_type is Mode.TABLE_ROW


class TestBlocks:
    """Delimited blocks."""

    def test_src_block(self) -> None:
        begin, body, end = classify("#+BEGIN_SRC python\n* not a headline\n#+END_SRC")

        assert begin.paragraph_type is Mode.BEGIN_BLOCK
        assert begin.major_mode is Mode.SRC
        assert begin.is_code_block_line
        assert begin.block_lang == "python"

        assert not isinstance(body, Headline)
        assert body.output_type is Mode.SRC
        assert body.is_code_block_line
        assert body.block_lang == "python"
        assert body.content == "* not a headline"

        assert end.is_end_block
        assert not end.is_code_block_line

    def test_only_matching_end_closes(self) -> None:
        lines = classify("#+begin_example\n#+END_QUOTE\n#+end_example\n- item")
        assert lines[1].output_type is Mode.EXAMPLE
        assert lines[2].is_end_block
        assert lines[3].paragraph_type is Mode.LIST_ITEM

    @pytest.mark.parametrize(
        ("name", "major"),
        [("QUOTE", Mode.BLOCKQUOTE), ("CENTER", Mode.CENTER), ("VERSE", None)],
    )
    def test_other_blocks(self, name: str, major: Mode | None) -> None:
        begin, body, _ = classify(f"#+BEGIN_{name}\n- item\n#+END_{name}")
        assert begin.is_begin_block
        assert begin.major_mode is major
        assert not begin.is_code_block_line
        assert body.paragraph_type is Mode.LIST_ITEM

    def test_end_line_takes_begin_indent(self) -> None:
        begin, _, end = classify("  #+BEGIN_SRC\n  x\n#+END_SRC")
        assert begin.indent == 2
        assert end.is_end_block
        assert end.indent == 2

    def test_nested_quote_end_lines(self) -> None:
        lines = classify("#+BEGIN_QUOTE\n  #+BEGIN_QUOTE\n#+END_QUOTE\n  #+END_QUOTE")
        assert [line.indent for line in lines] == [0, 2, 2, 0]

    def test_blank_line_in_src_keeps_block(self) -> None:
        lines = classify("#+BEGIN_SRC\n\n#+END_SRC")
        assert lines[1].is_blank
        assert lines[1].output_type is Mode.SRC


class TestOtherLines:
    """Remaining line types."""

    @pytest.mark.parametrize(
        ("text", "mode"),
        [
            ("   ", Mode.BLANK),
            ("-----", Mode.HORIZONTAL_RULE),
            (": example", Mode.INLINE_EXAMPLE),
            (":", Mode.INLINE_EXAMPLE),
            ("# a comment", Mode.COMMENT),
            ("#+TITLE: Document", Mode.COMMENT),
            ("#hashtag", Mode.PARAGRAPH),
            ("plain text", Mode.PARAGRAPH),
            ("key: value", Mode.PARAGRAPH),
        ],
    )
    def test_types(self, text: str, mode: Mode) -> None:
        assert _one(text).paragraph_type is mode

    def test_inline_example_content(self) -> None:
        assert _one("  :   indented code").content == "  indented code"

    def test_indent_and_lineno(self) -> None:
        lines = classify("a\n   b\n\n c")
        assert [line.indent for line in lines] == [0, 3, 0, 1]
        assert [line.lineno for line in lines] == [1, 2, 3, 4]

    def test_classifier_is_incremental(self) -> None:
        classifier = LineClassifier()
        assert classifier.classify_line("#+BEGIN_EXAMPLE").major_mode is Mode.EXAMPLE
        assert classifier.classify_line("| a |").output_type is Mode.EXAMPLE
        assert classifier.classify_line("#+END_EXAMPLE").is_end_block
        assert classifier.classify_line("| a |").output_type is Mode.TABLE_ROW
