"""Output buffer: the mode stack state machine.

Turns a sequence of classified lines into calls on a Renderer. Structure is
inferred from indentation and line types alone: a stack of open modes, each
with the indent it was opened at, decides whether an incoming line continues
the current accumulation or forces a flush, and which structures close or
open before the next accumulation starts.

Control flow for every line:
    prepare(line) -> [flush() -> renderer.flush()] -> accumulate(text)

After the last line, finish() flushes, closes every open mode and asks the
renderer for footnotes.

Usage:
    >>> from orgrender.classifier import classify
    >>> from orgrender.renderers.html import HtmlRenderer
    >>> render_lines(classify("- one\\n- two"), HtmlRenderer())
    '<ul>\\n  <li>one</li>\\n  <li>two</li>\\n</ul>\\n'

Thread Safety:
OutputBuffer instances are single-use and single-threaded. Create one per
conversion.

"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from orgrender.errors import InvalidLevelError, ModeMixError
from orgrender.lines import Line
from orgrender.modes import (
    BLOCK_MODES,
    CODE_MODES,
    DELIMITER_MODES,
    HEADING_MODES,
    SINGLETON_MODES,
    Mode,
)
from orgrender.renderers.protocol import Renderer
from orgrender.sink import OutputSink
from orgrender.utils.logger import get_logger

# Lines of these types contribute no text outside code blocks
_SILENT_TYPES = frozenset(
    {Mode.BLANK, Mode.COMMENT, Mode.TABLE_SEPARATOR, Mode.BEGIN_BLOCK, Mode.END_BLOCK}
)


class OutputBuffer:
    """Accumulates org lines and drives a renderer.

    Owns the mode stack of ``(mode, indent)`` pairs, the accumulation buffer
    and the headline number stack. Reading the stack bottom to top, opening
    indents never decrease.

    Attributes exposed read-only to renderers are listed in
    ``orgrender.renderers.protocol.BufferView``.

    """

    __slots__ = (
        "_renderer",
        "_output",
        "_logger",
        "_stack",
        "_parts",
        "_lines",
        "_buffer_mode",
        "_output_type",
        "_block_lang",
        "_headline_numbers",
    )

    def __init__(
        self,
        renderer: Renderer,
        *,
        output: OutputSink | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize an empty buffer.

        Args:
            renderer: Renderer receiving enter/leave/flush calls
            output: Sink for rendered output (a new one if None)
            logger: Diagnostics logger (module logger if None)
        """
        self._renderer = renderer
        self._output = output if output is not None else OutputSink()
        self._logger = logger or get_logger(__name__)
        self._stack: list[tuple[Mode, int]] = []
        self._parts: list[str] = []
        self._lines: list[Line] = []
        self._buffer_mode: Mode | None = None
        self._output_type = Mode.START
        self._block_lang = ""
        self._headline_numbers: list[int] = []

    # =========================================================================
    # Read-only view
    # =========================================================================

    @property
    def text(self) -> str:
        return "".join(self._parts)

    @property
    def lines(self) -> tuple[Line, ...]:
        return tuple(self._lines)

    @property
    def buffer_mode(self) -> Mode | None:
        return self._buffer_mode

    @property
    def output_type(self) -> Mode:
        return self._output_type

    @property
    def current_mode(self) -> Mode | None:
        return self._stack[-1][0] if self._stack else None

    @property
    def block_lang(self) -> str:
        return self._block_lang

    @property
    def depth(self) -> int:
        return max(len(self._stack) - 1, 0)

    @property
    def output(self) -> OutputSink:
        return self._output

    @property
    def mode_stack(self) -> tuple[tuple[Mode, int], ...]:
        """Open modes with their opening indents, bottom first."""
        return tuple(self._stack)

    @property
    def preserve_whitespace(self) -> bool:
        """True while accumulating whitespace-significant content."""
        return self.current_mode in CODE_MODES

    # =========================================================================
    # Driving
    # =========================================================================

    def feed(self, line: Line) -> None:
        """Prepare for a line and accumulate its text."""
        self.prepare(line)

        if self.preserve_whitespace and not line.is_delimiter:
            if self.current_mode is Mode.INLINE_EXAMPLE:
                if line.output_type is Mode.INLINE_EXAMPLE:
                    self.accumulate(f"{line.content}\n")
            else:
                self.accumulate(f"{line.text}\n")
            return

        if line.output_type in _SILENT_TYPES:
            return
        if self._parts:
            self.accumulate("\n")
        self.accumulate(line.content or "")

    def finish(self) -> str:
        """Flush, close every open mode, emit footnotes.

        Returns:
            Everything written to the output sink
        """
        self.flush()
        while self._stack:
            self.pop_mode()
        self._renderer.emit_footnotes(self)
        return self._output.build()

    def prepare(self, line: Line) -> None:
        """Prepare the buffer to receive content from a line.

        May flush the accumulated text and reshape the mode stack.
        """
        self._logger.debug(
            "Looking at %s(%s) : %r",
            line.paragraph_type.name,
            self.current_mode.name if self.current_mode else None,
            line.text,
        )
        if line.is_code_block_line:
            self._block_lang = line.block_lang
        if not self.should_accumulate(line):
            self.flush()
            self.maintain_mode_stack(line)
        self._output_type = line.output_type
        self._lines.append(line)

    def should_accumulate(self, line: Line) -> bool:
        """Test whether a line extends the current accumulation."""
        current = self.current_mode
        if current is None:
            return False

        # Code content is taken verbatim until its region ends
        if current in CODE_MODES:
            return not self._ends_code(current, line)

        if self._output_type in DELIMITER_MODES:
            return False
        if self._output_type in SINGLETON_MODES:
            return False
        if self._output_type is Mode.BLANK:
            return False

        if line.paragraph_type is Mode.PARAGRAPH:
            # Lazy continuation: deeper than every enclosing structure
            for _, indent in self._stack[:-1]:
                if line.indent <= indent:
                    return False
            return True

        return False

    def maintain_mode_stack(self, line: Line) -> None:
        """Close and open modes after a flush, ready for the next line."""
        # Headings and paragraphs never span a flush
        if self.current_mode in HEADING_MODES:
            self.pop_mode()
        if self.current_mode is Mode.PARAGRAPH:
            self.pop_mode()

        # Two blank lines close everything
        if not line.is_blank or self._output_type is Mode.BLANK:
            while self._stack and self._stack[-1][1] > line.indent:
                self.pop_mode()
            while self._stack and self._stack[-1][1] == line.indent:
                mode = self._stack[-1][0]
                if mode in BLOCK_MODES:
                    if line.is_end_block:
                        self.pop_mode()
                    break
                if mode is line.major_mode:  # an item can't close its own list
                    break
                self.pop_mode()

            if line.major_mode is not None and (
                not self._stack or self._stack[-1][1] < line.indent
            ):
                if not self.push_mode(line.major_mode, line.indent):
                    self._output.append_line()

            if (
                (not self._stack or self._stack[-1][1] <= line.indent)
                and not line.is_delimiter
                and not line.is_blank
            ):
                self.push_mode(line.paragraph_type, line.indent)
        elif self.current_mode is Mode.PARAGRAPH:
            self.pop_mode()

    # =========================================================================
    # Stack and accumulation primitives
    # =========================================================================

    def push_mode(self, mode: Mode, indent: int) -> bool:
        """Open a mode at an indent.

        Returns:
            True if the renderer suppressed output for this open
        """
        self._stack.append((mode, indent))
        return bool(self._renderer.enter(mode, indent, self))

    def pop_mode(self, expected: Mode | None = None) -> Mode | None:
        """Close the mode on top of the stack.

        Args:
            expected: Mode the caller means to close. A mismatch is logged
                and the actual top is closed anyway.

        Returns:
            The closed mode, or None if the stack was empty
        """
        if not self._stack:
            return None
        mode = self._stack[-1][0]
        if expected is not None and expected is not mode:
            self._logger.warning(
                "Modes don't match. Expected to pop %s, but popped %s",
                expected.name,
                mode.name,
            )
        self._renderer.leave(mode, self)
        self._stack.pop()
        return mode

    def flush(self) -> None:
        """Render the accumulated text and reset the buffer."""
        self._renderer.flush(self)
        self._parts.clear()
        self._lines.clear()
        self._buffer_mode = None

    def accumulate(self, text: str) -> None:
        """Append text under the current mode.

        Raises:
            ModeMixError: The buffer already holds text of another mode
        """
        current = self.current_mode
        if self._buffer_mode is not None and self._buffer_mode is not current:
            raise ModeMixError(self._buffer_mode, current)
        self._buffer_mode = current
        self._parts.append(text)

    def __lshift__(self, text: str) -> OutputBuffer:
        self.accumulate(text)
        return self

    def next_headline_number(self, level: int) -> str:
        """Get the next outline number for a heading level.

        Called once per numbered heading, in document order.

        Example:
            >>> from orgrender.renderers.html import HtmlRenderer
            >>> buf = OutputBuffer(HtmlRenderer())
            >>> [buf.next_headline_number(n) for n in (1, 2, 2, 1, 3)]
            ['1', '1.1', '1.2', '2', '2.1']
        """
        if level <= 0:
            raise InvalidLevelError(level)
        numbers = self._headline_numbers
        while len(numbers) < level:
            numbers.append(0)
        del numbers[level:]
        numbers[-1] += 1
        return ".".join(str(n) for n in numbers)

    def _ends_code(self, mode: Mode, line: Line) -> bool:
        if mode is Mode.INLINE_EXAMPLE:
            return line.output_type is not Mode.INLINE_EXAMPLE
        return line.is_end_block


def render_lines(
    lines: Iterable[Line],
    renderer: Renderer,
    *,
    logger: logging.Logger | None = None,
) -> str:
    """Run one conversion pass over classified lines.

    Args:
        lines: Classified lines in document order
        renderer: Target format
        logger: Diagnostics logger for the buffer

    Returns:
        Rendered output
    """
    buffer = OutputBuffer(renderer, logger=logger)
    for line in lines:
        buffer.feed(line)
    return buffer.finish()


__all__ = ["OutputBuffer", "render_lines"]
