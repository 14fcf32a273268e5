"""Tests for modes, line records, the output sink and the logger helper."""

from __future__ import annotations

import dataclasses
import logging

import pytest

from orgrender.lines import Headline, Line
from orgrender.modes import (
    BLOCK_MODES,
    CODE_MODES,
    DELIMITER_MODES,
    HEADING_MODES,
    TABLE_MODES,
    Mode,
)
from orgrender.sink import OutputSink
from orgrender.utils.logger import get_logger


class TestModes:
    """Mode enum and constant sets."""

    @pytest.mark.parametrize(("level", "mode"), [(1, Mode.HEADING1), (6, Mode.HEADING6)])
    def test_heading(self, level: int, mode: Mode) -> None:
        assert Mode.heading(level) is mode

    def test_heading_clamps(self) -> None:
        assert Mode.heading(9) is Mode.HEADING6

    def test_heading_rejects_zero(self) -> None:
        with pytest.raises(ValueError):
            Mode.heading(0)

    def test_sets(self) -> None:
        assert len(HEADING_MODES) == 6
        assert BLOCK_MODES == {Mode.BLOCKQUOTE, Mode.CENTER, Mode.EXAMPLE, Mode.SRC}
        assert CODE_MODES == {Mode.SRC, Mode.EXAMPLE, Mode.INLINE_EXAMPLE}
        assert Mode.TABLE_HEADER in TABLE_MODES
        assert DELIMITER_MODES == {Mode.BEGIN_BLOCK, Mode.END_BLOCK}

    def test_sets_are_immutable(self) -> None:
        assert isinstance(BLOCK_MODES, frozenset)


class TestLine:
    """Line records."""

    def test_content_defaults_to_stripped_text(self) -> None:
        assert Line("  hello  ", Mode.PARAGRAPH, 2).content == "hello"

    def test_output_type_prefers_assigned(self) -> None:
        line = Line("| h |", Mode.TABLE_ROW, assigned_paragraph_type=Mode.TABLE_HEADER)
        assert line.output_type is Mode.TABLE_HEADER
        assert Line("x", Mode.PARAGRAPH).output_type is Mode.PARAGRAPH

    def test_negative_indent_rejected(self) -> None:
        with pytest.raises(ValueError):
            Line("x", Mode.PARAGRAPH, -1)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Line("x", Mode.PARAGRAPH).indent = 2  # type: ignore[misc]

    def test_flags(self) -> None:
        assert Line("", Mode.BLANK).is_blank
        assert Line("#+END_SRC", Mode.END_BLOCK, is_end_block=True).is_delimiter
        assert not Line("x", Mode.PARAGRAPH).is_delimiter

    def test_headline(self) -> None:
        headline = Headline("** TODO x", Mode.HEADING2, content="x", level=2, keyword="TODO")
        assert isinstance(headline, Line)
        assert headline.level == 2
        assert "TODO" in repr(headline)

    def test_headline_level_validated(self) -> None:
        with pytest.raises(ValueError):
            Headline("x", Mode.HEADING1, level=0)


class TestOutputSink:
    """Append-only output sink."""

    def test_build_skips_empty(self) -> None:
        out = OutputSink()
        out.append("a").append("").append("b")
        assert out.build() == "ab"
        assert not out.at_line_start

    def test_at_line_start(self) -> None:
        out = OutputSink()
        assert out.at_line_start
        out.append("<p>")
        assert not out.at_line_start
        out.append_line("x")
        assert out.at_line_start
        assert out.build() == "<p>x\n"


class TestGetLogger:
    """Logger namespacing."""

    def test_prefix_added(self) -> None:
        assert get_logger("buffer").name == "orgrender.buffer"

    def test_module_names_kept(self) -> None:
        assert get_logger("orgrender.renderers.html").name == "orgrender.renderers.html"

    def test_level_applied(self) -> None:
        logger = get_logger("tests.level", level=logging.DEBUG)
        assert logger.level == logging.DEBUG
