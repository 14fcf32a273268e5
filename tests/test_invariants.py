"""Property-based tests for mode stack invariants using Hypothesis.

These tests feed arbitrary sequences of org lines through the output
buffer and check properties that must hold for every document.
"""

from __future__ import annotations

import re

from hypothesis import given, settings
from hypothesis import strategies as st

from orgrender import convert
from orgrender.buffer import OutputBuffer
from orgrender.classifier import classify
from orgrender.modes import Mode

ORG_LINES = [
    "",
    "* Heading",
    "** Sub heading",
    "* TODO Task",
    "- item",
    "  - nested item",
    "    - deeper item",
    "1. first",
    "  2) second",
    "- term :: definition",
    "para text",
    "  indented para",
    "      deep para",
    "| a | b |",
    "|---+---|",
    ": example",
    "#+BEGIN_SRC python",
    "#+END_SRC",
    "#+BEGIN_QUOTE",
    "#+END_QUOTE",
    "#+BEGIN_EXAMPLE",
    "#+END_EXAMPLE",
    "  #+BEGIN_CENTER",
    "  #+END_CENTER",
    "-----",
    "# comment",
    "*bold* and =code=",
]

documents = st.lists(st.sampled_from(ORG_LINES), max_size=40).map("\n".join)


class RecordingRenderer:
    """Renderer that records enter/leave calls and checks their nesting."""

    def __init__(self) -> None:
        self.open: list[Mode] = []
        self.enters = 0
        self.leaves = 0
        self.flushed_modes: list[Mode | None] = []

    def enter(self, mode: Mode, indent: int, buffer: OutputBuffer) -> bool:
        assert buffer.current_mode is mode
        self.open.append(mode)
        self.enters += 1
        return False

    def leave(self, mode: Mode, buffer: OutputBuffer) -> Mode:
        assert self.open and self.open[-1] is mode, "leave must close the innermost mode"
        self.open.pop()
        self.leaves += 1
        return mode

    def flush(self, buffer: OutputBuffer) -> None:
        if buffer.text:
            self.flushed_modes.append(buffer.buffer_mode)

    def emit_footnotes(self, buffer: OutputBuffer) -> bool:
        return False


class TestStackInvariants:
    """Invariants of the mode stack."""

    @given(documents)
    @settings(max_examples=200)
    def test_every_enter_has_a_leave(self, source: str) -> None:
        renderer = RecordingRenderer()
        buf = OutputBuffer(renderer)
        for line in classify(source):
            buf.feed(line)
        buf.finish()

        assert renderer.enters == renderer.leaves
        assert renderer.open == []
        assert buf.mode_stack == ()

    @given(documents)
    @settings(max_examples=200)
    def test_indents_never_decrease(self, source: str) -> None:
        buf = OutputBuffer(RecordingRenderer())
        for line in classify(source):
            buf.feed(line)
            indents = [indent for _, indent in buf.mode_stack]
            assert indents == sorted(indents)

    @given(documents)
    @settings(max_examples=100)
    def test_flushed_text_has_a_mode(self, source: str) -> None:
        renderer = RecordingRenderer()
        buf = OutputBuffer(renderer)
        for line in classify(source):
            buf.feed(line)
        buf.finish()

        assert None not in renderer.flushed_modes


class TestHtmlInvariants:
    """Invariants of the HTML output."""

    @given(documents)
    @settings(max_examples=200)
    def test_tags_balance(self, source: str) -> None:
        html = convert(source)
        for tag in ("p", "ul", "ol", "li", "dl", "table", "tr", "blockquote", "pre", "div"):
            opens = len(re.findall(rf"<{tag}[ >]", html))
            closes = html.count(f"</{tag}>")
            assert opens == closes, f"unbalanced <{tag}> in {html!r}"

    @given(st.text(max_size=300))
    @settings(max_examples=200)
    def test_arbitrary_text_converts(self, source: str) -> None:
        assert isinstance(convert(source), str)
